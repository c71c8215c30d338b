from pydantic import BaseModel, Field


class ResetPasswordIn(BaseModel):
    new_password: str = Field(min_length=1, max_length=256)
    confirm_password: str = Field(min_length=1, max_length=256)


class ResetPasswordOut(BaseModel):
    message: str = "Password has been reset successfully"
