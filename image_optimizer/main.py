from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .api.optimize import router as optimize_router
from .api.routes_health import router as health_router
from .core.config import Settings
from .core.errors import ImageOptimizerError
from .services.optimizer import ImageOptimizer


async def _image_optimizer_error_handler(request: Request, exc: ImageOptimizerError) -> PlainTextResponse:
    return PlainTextResponse(exc.detail + "\n", status_code=exc.status_code)


def create_app(settings: Optional[Settings] = None, optimizer: Optional[ImageOptimizer] = None) -> FastAPI:
    """Build the app around one explicit Settings instance."""
    settings = settings or Settings()
    app = FastAPI(title="Image Optimizer", description="On-demand image transform proxy")
    app.state.settings = settings
    app.state.optimizer = optimizer or ImageOptimizer(settings)

    app.add_exception_handler(ImageOptimizerError, _image_optimizer_error_handler)

    app.include_router(health_router)
    app.include_router(optimize_router)
    return app


app = create_app()
