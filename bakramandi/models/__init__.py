from bakramandi.models.base import Base  # noqa: F401

from bakramandi.models.listing import Listing  # noqa: F401
from bakramandi.models.account import User, PasswordResetToken  # noqa: F401
from bakramandi.models.order import Order  # noqa: F401
