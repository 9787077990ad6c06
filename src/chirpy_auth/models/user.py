from pydantic import AwareDatetime, BaseModel, Field

from .._storage import User


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password digest."""

    id: str = Field(description="The user identifier")
    email: str = Field(description="The user's email address")
    created_at: AwareDatetime | None = Field(
        default=None, description="When the user was created"
    )
    updated_at: AwareDatetime | None = Field(
        default=None, description="When the user was last updated"
    )

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            created_at=getattr(user, "created_at", None),
            updated_at=getattr(user, "updated_at", None),
        )
