# External imports
from fastapi import APIRouter, Depends, Request, status
import logging

# Internal imports
from concept_server.api.routes import Routes
from concept_server.schemas.user import (
    Message,
    UserCreated,
    UserCredentials,
    UserList,
    UserOut,
    UserUpdate,
)

# Initialize router
router = APIRouter()

# Configure logging
logger = logging.getLogger(__name__)


def get_routes(request: Request) -> Routes:
    """Dependency returning the application's ``Routes``."""
    return request.app.state.routes


@router.get("/session", response_model=UserOut, tags=["Session"])
async def get_session_user(request: Request, routes: Routes = Depends(get_routes)):
    return await routes.get_session_user(request.session)


@router.get("/users", response_model=UserList, tags=["Users"])
async def get_users(routes: Routes = Depends(get_routes)):
    return {"users": await routes.get_users()}


@router.get("/users/{username}", response_model=UserOut, tags=["Users"])
async def get_user(username: str, routes: Routes = Depends(get_routes)):
    return await routes.get_user(username)


@router.post("/users", response_model=UserCreated, status_code=status.HTTP_201_CREATED, tags=["Users"])
async def create_user(
    request: Request,
    credentials: UserCredentials,
    routes: Routes = Depends(get_routes)
):
    return await routes.create_user(request.session, credentials.username, credentials.password)


@router.patch("/users", response_model=Message, tags=["Users"])
async def update_user(request: Request, update: UserUpdate, routes: Routes = Depends(get_routes)):
    return await routes.update_user(request.session, update.model_dump(exclude_unset=True))


@router.delete("/users", response_model=Message, tags=["Users"])
async def delete_user(request: Request, routes: Routes = Depends(get_routes)):
    return await routes.delete_user(request.session)


@router.post("/login", response_model=Message, tags=["Session"])
async def log_in(request: Request, credentials: UserCredentials, routes: Routes = Depends(get_routes)):
    result = await routes.log_in(request.session, credentials.username, credentials.password)
    logger.info(f"User logged in: {credentials.username}")
    return result


@router.post("/logout", response_model=Message, tags=["Session"])
async def log_out(request: Request, routes: Routes = Depends(get_routes)):
    return await routes.log_out(request.session)
