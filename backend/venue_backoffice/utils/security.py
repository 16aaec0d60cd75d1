"""
Security utilities for password hashing and JWT tokens
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from email_validator import EmailNotValidError, validate_email as check_email_syntax
from jose import JWTError, jwt
from passlib.context import CryptContext

from venue_backoffice.config import settings
from venue_backoffice.exceptions import ValidationError

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt

    Args:
        password: Plain text password

    Returns:
        Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password against a hash

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        True if password matches, False otherwise (also when no hash is stored)
    """
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token

    Args:
        data: Data to encode in the token
        expires_delta: Optional expiration time delta

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT token (signature and expiry)

    Returns:
        Decoded token payload or None if invalid
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def verify_token_type(payload: Dict[str, Any], expected_type: str) -> bool:
    return payload.get("type") == expected_type


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> str:
    """
    Return the normalized email or raise ValidationError

    Same rules as the ``EmailStr`` fields on the login schemas, so every
    address accepted here can also be used to log in.
    """
    normalized = normalize_email(email)
    try:
        check_email_syntax(normalized, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Invalid email format")
    return normalized


def validate_password(password: str, field: str = "Password") -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"{field} must be at least {MIN_PASSWORD_LENGTH} characters long")


def parse_uuid(value, label: str) -> uuid.UUID:
    """Parse an identifier, raising ValidationError('Invalid <label> ID') on bad input"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID")
