from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from loguru import logger

from kinpath.api.auth import verify_session
from kinpath.errors import EmptyScopeError, InvariantViolationError, UnknownPersonError
from kinpath.resolver.schemas import RelationshipPathRequest, RelationshipPathResponse
from kinpath.resolver.service import RelationshipResolver
from kinpath.tree_stores.base import TreeStore


def _create_relationship_path_endpoint(resolver: RelationshipResolver):
    """Create the relationship path endpoint handler."""

    # Plain def: the search is CPU bound and runs in the threadpool.
    def find_relationship_path(
        body: RelationshipPathRequest,
        request: Request,  # noqa: ARG001
        _: str = Depends(verify_session),
    ):
        try:
            return resolver.resolve(body)
        except UnknownPersonError as e:
            logger.warning(str(e))
            raise HTTPException(status_code=404, detail=str(e)) from e
        except EmptyScopeError as e:
            logger.warning(str(e))
            raise HTTPException(status_code=400, detail=str(e)) from e
        except InvariantViolationError as e:
            logger.error(
                f"Invariant violation resolving {body.person1_id} -> {body.person2_id}: {e}"
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": "invariant_violation",
                    "kind": type(e).__name__,
                    "message": str(e),
                },
            )

    return find_relationship_path


def _create_trees_endpoint(tree_store: TreeStore):
    """Create the tree listing endpoint handler."""

    async def list_trees(
        request: Request,  # noqa: ARG001
        _: str = Depends(verify_session),
    ):
        return {"treeIds": tree_store.get_tree_ids()}

    return list_trees


def get_endpoints_router(
    *,
    tree_store: TreeStore,
    resolver: RelationshipResolver,
) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy"}

    router.post(
        "/api/relationships/path",
        response_model=RelationshipPathResponse,
        response_model_by_alias=True,
    )(_create_relationship_path_endpoint(resolver))
    router.get("/api/trees")(_create_trees_endpoint(tree_store))

    return router
