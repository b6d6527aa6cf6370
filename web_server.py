# ======================================
# Atlas Web Server
# - FastAPI server for the UMAP bubble chart explorer
# - REST API endpoints for the web frontend
# - CORS enabled for local development
# ======================================

# ===============================
# Standard Library
# ===============================
import logging
from contextlib import asynccontextmanager

# ===============================
# Third-party Libraries
# ===============================
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

# ===============================
# Local Imports
# ===============================
import config
from atlas import __version__
from atlas.chart import PointerEvent
from atlas.configuration import DEFAULT_CONFIG, validate_config
from atlas.errors import UnknownCategoryError, UnknownFamilyError
from atlas.loader import DataSource
from atlas.session import ExplorerSession, LoadStatus
from types_models import ExplorerConfig
from web.models import (
    CategoryToggleRequest,
    ChartPayload,
    ClickResponse,
    FamiliesResponse,
    FamilyRequest,
    FilterResponse,
    HealthResponse,
    LoadResponse,
    PointerRequest,
    SearchRequest,
    TooltipResponse,
)
from web.visualization_utils import build_chart_payload

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Mirror server logs to stdout and to the server log file."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(config.SERVER_LOG_FILE, encoding="utf-8"),
        ],
    )


# ===============================
# Helpers
# ===============================
def get_session(request: Request) -> ExplorerSession:
    session: ExplorerSession | None = request.app.state.session
    if session is None:
        raise HTTPException(
            status_code=503,
            detail="Explorer not initialised. Check DATA_DIR / DATA_BASE_URL in config.py.",
        )
    return session


def _filter_response(session: ExplorerSession) -> FilterResponse:
    return FilterResponse(
        search_text=session.filters.search_text,
        selected_categories=[
            token for token in session.categories if token in session.filters.selected_categories
        ],
        categories=list(session.categories),
        relevant_count=session.relevant_count,
        total_points=len(session.points),
    )


def _pointer_event(request: PointerRequest) -> PointerEvent:
    return PointerEvent(
        x=request.x, y=request.y, page_x=request.page_x, page_y=request.page_y
    )


# ===============================
# App Factory
# ===============================
def create_app(
    config_obj: ExplorerConfig | None = None,
    source: DataSource | None = None,
) -> FastAPI:
    """Build the FastAPI app around a single explorer session."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the session and load the default family on startup."""
        cfg = config_obj if config_obj is not None else DEFAULT_CONFIG.model_copy()
        app.state.session = None
        try:
            print("🚀 Loading atlas explorer...")
            validate_config(cfg)
            # Links open in the browser, so the server never navigates itself.
            session = ExplorerSession(cfg, source=source, navigate=None)
            app.state.session = session

            status = await session.load_family(cfg.default_family)
            if status is LoadStatus.COMMITTED:
                print(f"✅ Loaded {cfg.default_family} ({len(session.points)} papers)")
            else:
                print(f"❌ Failed to load {cfg.default_family}: {session.last_error}")
                # Don't exit - the server stays up so another family can be selected

        except (ValueError, FileNotFoundError) as e:
            print(f"❌ Failed to initialise atlas explorer: {e}")

        yield

        print("🔄 Shutting down atlas explorer...")
        session = app.state.session
        if session is not None and session.chart is not None:
            session.router.detach()
            session.chart.destroy()
        app.state.session = None

    app = FastAPI(
        title="UMAP Atlas API",
        description="Interactive UMAP bubble chart of paper embeddings",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.session = None

    # Add CORS middleware for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify your frontend domain
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ===============================
    # API Endpoints
    # ===============================
    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health check endpoint."""
        session: ExplorerSession | None = request.app.state.session
        if session is None:
            return HealthResponse(
                status="error",
                version=__version__,
                loaded=False,
                family=None,
                total_points=0,
            )

        return HealthResponse(
            status="healthy" if session.loaded else "error",
            version=__version__,
            loaded=session.loaded,
            family=session.family,
            total_points=len(session.points),
            last_error=session.last_error,
        )

    @app.get("/families", response_model=FamiliesResponse)
    async def list_families(session: ExplorerSession = Depends(get_session)):
        return FamiliesResponse(
            families=list(session.loader.families), current=session.family
        )

    @app.post("/families/select", response_model=LoadResponse)
    async def select_family(
        request: FamilyRequest, session: ExplorerSession = Depends(get_session)
    ):
        """Load a category family; on failure the previous chart stays."""
        try:
            session.select_family(request.family)
            status = await session.load_family(request.family)
        except UnknownFamilyError as e:
            raise HTTPException(status_code=400, detail=str(e))

        error = None
        if status is LoadStatus.FAILED:
            error = session.last_error
        elif status is LoadStatus.STALE:
            error = "Superseded by a newer request"

        return LoadResponse(
            family=request.family,
            success=status is LoadStatus.COMMITTED,
            total_points=len(session.points),
            categories=list(session.categories),
            error=error,
        )

    @app.get("/categories", response_model=FilterResponse)
    async def get_categories(session: ExplorerSession = Depends(get_session)):
        return _filter_response(session)

    @app.post("/categories/toggle", response_model=FilterResponse)
    async def toggle_category(
        request: CategoryToggleRequest,
        session: ExplorerSession = Depends(get_session),
    ):
        try:
            session.toggle_category(request.category, request.selected)
        except UnknownCategoryError:
            raise HTTPException(
                status_code=400, detail=f"Unknown category: {request.category}"
            )
        return _filter_response(session)

    @app.post("/categories/all", response_model=FilterResponse)
    async def select_all(session: ExplorerSession = Depends(get_session)):
        session.select_all_categories()
        return _filter_response(session)

    @app.post("/categories/none", response_model=FilterResponse)
    async def select_none(session: ExplorerSession = Depends(get_session)):
        session.select_no_categories()
        return _filter_response(session)

    @app.post("/search", response_model=FilterResponse)
    async def search(
        request: SearchRequest, session: ExplorerSession = Depends(get_session)
    ):
        session.set_search_text(request.search_text)
        return _filter_response(session)

    @app.get("/chart", response_model=ChartPayload)
    async def get_chart(session: ExplorerSession = Depends(get_session)):
        return build_chart_payload(
            session.chart,
            session.family,
            width=session.canvas.width,
            height=session.canvas.height,
        )

    @app.post("/pointer/move", response_model=TooltipResponse)
    async def pointer_move(
        request: PointerRequest, session: ExplorerSession = Depends(get_session)
    ):
        tooltip = session.pointer_move(_pointer_event(request))
        return TooltipResponse(
            visible=tooltip.visible,
            title=tooltip.title,
            left=tooltip.left,
            top=tooltip.top,
            point_index=tooltip.point_index,
        )

    @app.post("/pointer/click", response_model=ClickResponse)
    async def pointer_click(
        request: PointerRequest, session: ExplorerSession = Depends(get_session)
    ):
        return ClickResponse(link=session.pointer_click(_pointer_event(request)))

    return app


app = create_app()


# ===============================
# Server Entry Point
# ===============================
def main(
    host: str = config.SERVER_HOST,
    port: int = config.SERVER_PORT,
    config_obj: ExplorerConfig | None = None,
) -> None:
    """Run the FastAPI server."""
    configure_logging()
    print("🌐 Starting Atlas Web Server...")
    print(f"🔍 API docs available at: http://localhost:{port}/docs")

    uvicorn.run(
        app if config_obj is None else create_app(config_obj),
        host=host,
        port=port,
        reload=False,
        access_log=True,
    )


if __name__ == "__main__":
    main()
