"""Firebase ID token authentication — token validation and JWKS caching."""

from __future__ import annotations

import json
import logging
import time
import urllib.error
import urllib.request
from typing import Any

from fastapi import HTTPException, status
from jose import jwk, jwt
from jose.constants import Algorithms
from jose.exceptions import ExpiredSignatureError, JWSSignatureError, JWTClaimsError, JWTError

logger = logging.getLogger("firebase_auth")

_JWKS_URI = "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"
_JWKS_TTL_SECONDS = 60 * 60

_cache: dict[str, Any] = {
    "jwks": None,
    "jwks_timestamp": 0.0,
}


def get_jwks() -> dict[str, Any]:
    now = time.time()

    if _cache["jwks"] is not None and now - _cache["jwks_timestamp"] < _JWKS_TTL_SECONDS:
        return _cache["jwks"]

    logger.info("Fetching JWKS from %s", _JWKS_URI)

    try:
        req = urllib.request.Request(_JWKS_URI)  # noqa: S310
        with urllib.request.urlopen(req, timeout=15) as resp:  # noqa: S310
            jwks = json.loads(resp.read().decode())

        _cache["jwks"] = jwks
        _cache["jwks_timestamp"] = now
        return jwks
    except (urllib.error.URLError, urllib.error.HTTPError) as e:
        logger.error("Failed to fetch JWKS: %s", e)
        if _cache["jwks"] is not None:
            logger.warning("Using expired JWKS from cache")
            return _cache["jwks"]
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Could not fetch JWKS: {e}",
        ) from e


def get_signing_key(token: str) -> dict[str, str]:
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token header: {e}",
        ) from e

    kid = header.get("kid")
    if not kid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no 'kid' in header",
        )

    jwks = get_jwks()
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"No matching signing key for kid: {kid}",
    )


def validate_token(token: str, project_id: str) -> dict[str, Any]:
    if not project_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Missing Firebase configuration",
        )

    signing_key_dict = get_signing_key(token)
    algorithm = signing_key_dict.get("alg", Algorithms.RS256)
    public_key = jwk.construct(signing_key_dict, algorithm=algorithm)

    try:
        payload = jwt.decode(
            token,
            public_key,
            algorithms=[algorithm],
            audience=project_id,
            issuer=f"https://securetoken.google.com/{project_id}",
            options={
                "verify_signature": True,
                "verify_aud": True,
                "verify_iss": True,
                "verify_exp": True,
                "require_exp": True,
                "require_iss": True,
                "require_aud": True,
                "require_sub": True,
            },
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is expired",
        ) from e
    except JWSSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token signature",
        ) from e
    except JWTClaimsError as e:
        detail = "Invalid authentication credentials"
        if "audience" in str(e).lower():
            detail = "Invalid token audience"
        elif "issuer" in str(e).lower():
            detail = "Invalid token issuer"
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail) from e
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        ) from e

    if not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has an empty subject",
        )
    return payload
