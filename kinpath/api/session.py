"""Session login and logout"""

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.security import HTTPBasicCredentials

from kinpath.api.auth import is_authenticated, verify_basic_auth


def get_session_router() -> APIRouter:
    router = APIRouter()

    @router.get("/session")
    async def session_status(request: Request):
        return {
            "authenticated": is_authenticated(request),
            "username": request.session.get("username"),
        }

    @router.post("/login")
    async def login(
        request: Request,
        username: str = Form(...),
        password: str = Form(...),
    ):
        credentials = HTTPBasicCredentials(username=username, password=password)

        if not verify_basic_auth(credentials):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username or password",
            )

        request.session["authenticated"] = True
        request.session["username"] = username
        return {"authenticated": True, "username": username}

    @router.post("/logout")
    async def logout(request: Request):
        request.session.clear()
        return {"authenticated": False}

    return router
