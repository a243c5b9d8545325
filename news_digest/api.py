"""HTTP read endpoint exposing the published articles."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .pipeline import NewsPipeline


def create_app(pipeline: NewsPipeline) -> FastAPI:
    app = FastAPI(title="News Digest")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.get("/api/newsdata/all")
    def get_all_news():
        """Active articles, newest first."""
        result = pipeline.list_active_articles()
        if "error" in result:
            return JSONResponse(status_code=500, content=result)
        return result

    return app


__all__ = ["create_app"]
