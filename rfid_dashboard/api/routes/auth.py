# =======================================================================================
# rfid_dashboard/api/routes/auth.py - Dashboard Authentication Endpoints
# =======================================================================================


from fastapi import APIRouter, Depends, status
from ...models.schemas import (
    LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserInfo,
)
from ...services.auth_service import AuthService
from ..dependencies import get_auth_service

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    request: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)
):
    auth_service.register(request.regNumber, request.name, request.email, request.password)
    return RegisterResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login_user(
    request: LoginRequest, auth_service: AuthService = Depends(get_auth_service)
):
    token, identity = auth_service.login(request.regNumber, request.password)
    return LoginResponse(token=token, user=UserInfo.from_identity(identity))
