from fastapi import APIRouter, Depends

from app.api.deps import get_auth_service, get_current_user_id
from app.schemas.UserSchemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse)
async def register(body: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    result = await auth.register(
        name=body.name,
        email=body.email,
        password=body.password,
        disabilityType=body.disabilityType,
        phone=body.phone,
        role=body.role,
    )
    return AuthResponse(token=result.token, user=result.user)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    result = await auth.login(body.email, body.password)
    return AuthResponse(token=result.token, user=result.user)


@router.get("/me", response_model=UserResponse)
async def me(user_id: str = Depends(get_current_user_id), auth: AuthService = Depends(get_auth_service)):
    """Profile of the token holder (never includes the password hash)."""
    return UserResponse(data=await auth.get_current_user(user_id))


# older clients still call /verify to check a stored token
@router.get("/verify", response_model=UserResponse)
async def verify(user_id: str = Depends(get_current_user_id), auth: AuthService = Depends(get_auth_service)):
    return UserResponse(data=await auth.get_current_user(user_id))
