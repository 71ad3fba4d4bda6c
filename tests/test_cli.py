"""
Tests for the command line entry point, config loading and file input.
"""
import json
import logging
from email.message import EmailMessage

import dotenv
import pytest

from spam_email_classifier import analyze, cli, llm
from spam_email_classifier.config import DEFAULT_MODEL, load_settings
from spam_email_classifier.email_parser import eml_to_text, load_email_text
from spam_email_classifier.errors import ConfigurationError, InputError
from spam_email_classifier.logger import set_level

_ENV_VARS = [
    "ANTHROPIC_API_KEY",
    "SPAM_CLASSIFIER_USE_AI",
    "SPAM_CLASSIFIER_API_URL",
    "SPAM_CLASSIFIER_MODEL",
    "SPAM_CLASSIFIER_TIMEOUT",
    "SPAM_CLASSIFIER_LOCAL_DELAY",
    "SPAM_CLASSIFIER_HISTORY_SIZE",
    "SPAM_CLASSIFIER_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("spam_email_classifier.config.load_dotenv", lambda *a, **k: False)
    yield
    set_level("INFO")


class TestSettings:
    def test_defaults(self):
        settings = load_settings()

        assert settings.api_key is None
        assert settings.use_ai is False
        assert settings.model == DEFAULT_MODEL
        assert settings.history_size == 10

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        monkeypatch.setenv("SPAM_CLASSIFIER_USE_AI", "yes")
        monkeypatch.setenv("SPAM_CLASSIFIER_HISTORY_SIZE", "3")

        settings = load_settings()

        assert settings.api_key == "sk-env"
        assert settings.use_ai is True
        assert settings.history_size == 3

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("SPAM_CLASSIFIER_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError):
            load_settings()

    def test_log_level_applied_to_module_loggers(self, monkeypatch):
        monkeypatch.setenv("SPAM_CLASSIFIER_LOG_LEVEL", "warning")

        settings = load_settings()

        assert settings.log_level == "warning"
        assert analyze.logger.getEffectiveLevel() == logging.WARNING
        assert llm.logger.getEffectiveLevel() == logging.WARNING

    def test_log_level_from_dotenv_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("SPAM_CLASSIFIER_LOG_LEVEL=ERROR\n", encoding="utf-8")
        # register the var so teardown removes what load_dotenv writes
        monkeypatch.setenv("SPAM_CLASSIFIER_LOG_LEVEL", "INFO")
        monkeypatch.delenv("SPAM_CLASSIFIER_LOG_LEVEL")
        monkeypatch.setattr("spam_email_classifier.config.load_dotenv", lambda: dotenv.load_dotenv(env_file))

        load_settings()

        assert analyze.logger.getEffectiveLevel() == logging.ERROR


class TestEmailInput:
    def test_eml_flattened(self, tmp_path):
        msg = EmailMessage()
        msg["Subject"] = "You won!"
        msg["From"] = "promo@example.com"
        msg.set_content("Click here to claim.")
        path = tmp_path / "mail.eml"
        path.write_bytes(msg.as_bytes())

        text = load_email_text(path)

        assert text.startswith("Subject: You won!\nFrom: promo@example.com")
        assert "Click here to claim." in text

    def test_multipart_prefers_plain(self):
        msg = EmailMessage()
        msg["Subject"] = "Report"
        msg.set_content("plain body")
        msg.add_alternative("<p>html body</p>", subtype="html")

        text = eml_to_text(msg.as_bytes())

        assert "plain body" in text
        assert "html body" not in text

    def test_html_only_and_attachment_skipped(self):
        msg = EmailMessage()
        msg["Subject"] = "Invoice"
        msg.set_content("<p>See attached invoice</p>", subtype="html")
        msg.add_attachment(b"lottery prize", maintype="application", subtype="octet-stream", filename="x.bin")

        text = eml_to_text(msg.as_bytes())

        assert "See attached invoice" in text
        assert "lottery prize" not in text

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError):
            load_email_text(tmp_path / "nope.txt")


class TestMain:
    @pytest.mark.parametrize(
        "flags, expected",
        [([], None), (["--ai"], True), (["--no-ai"], False)],
    )
    def test_ai_flag(self, flags, expected):
        args = cli.build_parser().parse_args(["--text", "hi", *flags])

        assert args.ai is expected

    def test_example_as_json(self, capsys):
        assert cli.main(["--example", "spam", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["classification"] == "spam"
        assert data["method"] == "local"

    def test_text_file(self, tmp_path, capsys):
        path = tmp_path / "mail.txt"
        path.write_text("Are we still on for Friday?", encoding="utf-8")

        assert cli.main(["--input", str(path)]) == 0
        assert "Classification: ham" in capsys.readouterr().out

    def test_blank_text(self, capsys):
        assert cli.main(["--text", "   "]) == 1
        assert "Nothing to classify" in capsys.readouterr().err

    def test_ai_without_key(self, capsys):
        assert cli.main(["--text", "hello", "--ai"]) == 3
        assert "Classification: error" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
