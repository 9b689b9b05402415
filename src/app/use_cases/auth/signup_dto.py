"""
Signup Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- SignupCommand: Input to use case (validated business intent)
- SignupResponse: Output from use case (see dtos.py)
"""

from typing import Optional
from pydantic import BaseModel


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    username: str
    email: str
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
