from typing import Optional

from fastapi import Header


def get_current_user_id(x_user_id: Optional[str] = Header(None, max_length=450)) -> Optional[str]:
    """
    Identity of the staff member making the request.

    Authentication happens upstream; whatever id the gateway forwards in
    `X-User-Id` is recorded on bookings as-is.
    """
    return x_user_id or None
