from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from .analyze import ClassificationService
from .config import Settings, load_settings
from .examples import get_example
from .models import ClassificationResult


class AnalyzeRequest(BaseModel):
    text: str
    use_ai: Optional[bool] = None
    api_key: Optional[str] = None


def create_app(settings: Settings | None = None, service: ClassificationService | None = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="Spam Email Classifier")
    app.state.settings = settings
    app.state.service = service or ClassificationService.from_settings(settings)

    def _service(request: Request) -> ClassificationService:
        return request.app.state.service

    # ==========================================================
    # Classification
    # ==========================================================
    @app.post("/analyze", response_model=ClassificationResult)
    def analyze(body: AnalyzeRequest, request: Request):
        use_ai = settings.use_ai if body.use_ai is None else body.use_ai
        result = _service(request).analyze(
            body.text,
            use_remote=use_ai,
            credential=body.api_key or settings.api_key,
        )
        if result is None:
            raise HTTPException(status_code=400, detail="Email text is empty")
        return result

    # ==========================================================
    # History
    # ==========================================================
    @app.get("/history", response_model=List[ClassificationResult])
    def history(request: Request):
        return _service(request).history.all()

    @app.delete("/history", status_code=204)
    def clear_history(request: Request):
        _service(request).history.clear()

    # ==========================================================
    # Demo texts
    # ==========================================================
    @app.get("/examples/{kind}")
    def example(kind: str):
        try:
            return {"kind": kind, "text": get_example(kind)}
        except KeyError as e:
            raise HTTPException(status_code=404, detail=str(e.args[0])) from e

    return app
