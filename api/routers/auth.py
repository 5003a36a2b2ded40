from fastapi import APIRouter, HTTPException, Depends

# Import schemas and services
from schemas.user_schema import UserCreate, UserInfo, UserProfile
from services.firebase_service import create_user_in_firebase, bootstrap_demo_user
from core.security import get_current_user

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={404: {"description": "Not found"}},
)

@router.post("/signup", response_model=UserInfo)
async def signup(user: UserCreate):
    """Signs up a new user."""
    try:
        new_user = create_user_in_firebase(user.email, user.password, user.full_name)
        return new_user
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")

@router.get("/me", response_model=UserInfo)
async def read_users_me(current_user: dict = Depends(get_current_user)):
    """
    Get the profile of the currently authenticated user.
    """
    # `current_user` is the decoded token payload
    return UserInfo(
        uid=current_user['uid'],
        email=current_user.get('email'),
        full_name=current_user.get('name')
    )

@router.post("/demo", response_model=UserProfile)
async def get_started():
    """
    Returns the first existing user, creating a demo user on an empty database.
    """
    try:
        return bootstrap_demo_user()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {e}")
