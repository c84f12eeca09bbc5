from datetime import datetime, timezone
from sqlalchemy.orm import Session
from jose import jwt
from salonbase.models.token_blacklist import TokenBlacklist
from salonbase.logger import get_logger

logger = get_logger(__name__)


class TokenBlacklistService:
    @staticmethod
    def token_expiry(token: str) -> datetime:
        """Expiry of a token we already trust, read without verifying the signature again"""
        payload = jwt.get_unverified_claims(token)
        return datetime.fromtimestamp(payload.get("exp"), tz=timezone.utc)

    @staticmethod
    def blacklist_token(db: Session, token: str, expires_at: datetime) -> None:
        """Revoke a token until it would have expired anyway"""
        payload = jwt.get_unverified_claims(token)
        jti = payload.get("jti")
        if not jti:
            logger.warning("Token without JTI cannot be blacklisted")
            return

        if db.query(TokenBlacklist).filter(TokenBlacklist.jti == jti).first():
            logger.info(f"Token with JTI {jti} already blacklisted")
            return

        try:
            db.add(TokenBlacklist(jti=jti, token=token, expires_at=expires_at))
            db.commit()
            logger.info(f"Token with JTI {jti} blacklisted")
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def is_token_blacklisted(db: Session, jti: str) -> bool:
        blacklisted_token = db.query(TokenBlacklist).filter(
            TokenBlacklist.jti == jti,
            TokenBlacklist.expires_at > datetime.now(timezone.utc),
        ).first()
        return blacklisted_token is not None

    @staticmethod
    def cleanup_expired_tokens(db: Session) -> int:
        """Remove expired tokens from blacklist to keep the table small"""
        try:
            expired_count = db.query(TokenBlacklist).filter(
                TokenBlacklist.expires_at <= datetime.now(timezone.utc)
            ).delete()
            db.commit()
        except Exception as e:
            logger.error(f"Error cleaning up expired tokens: {str(e)}")
            db.rollback()
            raise

        if expired_count > 0:
            logger.info(f"Cleaned up {expired_count} expired tokens from blacklist")
        return expired_count


token_blacklist_service = TokenBlacklistService()
