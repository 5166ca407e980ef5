"""JWT Token Validation for the external identity provider"""
import jwt
from typing import Any, Dict, Optional

from ..config.settings import settings
from ..domain.errors import AuthenticationError
from ..domain.models import ActorContext
from .logger import get_logger

logger = get_logger(__name__)


class TokenValidator:
    """
    Validates bearer tokens issued by the identity provider.
    
    The token's `sub` claim is the principal identifier. Roles are NOT
    read from the token: they are looked up per request by the role gate.
    """
    
    def __init__(
        self,
        secret: Optional[str] = None,
        audience: Optional[str] = None,
        algorithm: Optional[str] = None,
        verify: Optional[bool] = None
    ):
        self.secret = secret if secret is not None else settings.jwt_secret
        self.audience = audience if audience is not None else settings.jwt_audience
        self.algorithm = algorithm or settings.jwt_algorithm
        self.verify = settings.verify_tokens if verify is None else verify
    
    def validate_token(self, token: str) -> Dict[str, Any]:
        """
        Validate a JWT
        
        In development mode the signature is not checked so locally minted
        tokens work; expiry is still enforced.
        
        Raises:
            AuthenticationError: If token is invalid
        """
        if not token:
            raise AuthenticationError("Token is missing")
        
        if token.startswith("Bearer "):
            token = token[7:]
        
        try:
            if not self.verify:
                return jwt.decode(
                    token,
                    options={
                        "verify_signature": False,
                        "verify_exp": True,
                        "verify_aud": False,
                    }
                )
            
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience or None,
                options={"verify_exp": True, "verify_aud": bool(self.audience)}
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Token expired")
            raise AuthenticationError("Token has expired")
        except jwt.InvalidAudienceError as e:
            logger.warning(f"Invalid token audience: {e}")
            raise AuthenticationError("Invalid token audience")
        except jwt.PyJWTError as e:
            logger.warning(f"JWT validation error: {e}")
            raise AuthenticationError(f"Invalid token: {str(e)}")
    
    def get_actor_context(self, token: str) -> ActorContext:
        """Extract the principal from a validated token"""
        claims = self.validate_token(token)
        
        user_id = claims.get("sub")
        if not user_id:
            logger.warning(f"No subject in token claims. Available claims: {list(claims.keys())}")
            raise AuthenticationError("Unable to determine user from token")
        
        return ActorContext(user_id=str(user_id), email=claims.get("email"))


# Global validator instance
_validator: Optional[TokenValidator] = None


def get_token_validator() -> TokenValidator:
    """Get global token validator instance"""
    global _validator
    if _validator is None:
        _validator = TokenValidator()
    return _validator


def get_current_user(authorization: str) -> ActorContext:
    """
    Get current user from authorization header
    
    Args:
        authorization: Authorization header value
        
    Returns:
        ActorContext
    """
    if not authorization:
        raise AuthenticationError("Authorization header is missing")
    
    return get_token_validator().get_actor_context(authorization)
