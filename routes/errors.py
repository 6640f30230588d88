from fastapi import HTTPException, status

REASON_STATUS = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "not_authorized": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_invite": status.HTTP_404_NOT_FOUND,
    "already_member": status.HTTP_409_CONFLICT,
    "failed": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_for_result(result: dict) -> dict:
    """Turn a failed service result into an HTTPException; pass successes through."""
    if not result.get("success"):
        code = REASON_STATUS.get(result.get("reason"), status.HTTP_500_INTERNAL_SERVER_ERROR)
        raise HTTPException(status_code=code, detail=result.get("error") or "Request failed")
    return result
