from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from kinpath.api.endpoints import get_endpoints_router
from kinpath.api.session import get_session_router
from kinpath.config import settings
from kinpath.resolver.service import RelationshipResolver
from kinpath.tree_stores.base import TreeStore


def create_app(
    *,
    tree_store: TreeStore,
    resolver: RelationshipResolver | None = None,
) -> FastAPI:
    """Create FastAPI app."""
    app = FastAPI(title="kinpath")

    # Add session middleware first
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        router=get_endpoints_router(
            tree_store=tree_store, resolver=resolver or RelationshipResolver(tree_store)
        )
    )
    app.include_router(router=get_session_router())

    return app
