from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import IdentityChangePendingError


@dataclass
class IdentityChangeGuard:
    """Two-step confirmation for changing the login email of an account.

    The first save with an email different from ``original_email`` raises
    :class:`IdentityChangePendingError` and arms the warning; the next save
    goes through. Editing the email back to the stored value disarms it.
    """

    original_email: str
    warning_raised: bool = False

    def email_edited(self, email: str) -> None:
        if email == self.original_email:
            self.warning_raised = False

    def confirm_save(self, email: str) -> None:
        self.email_edited(email)
        if email != self.original_email and not self.warning_raised:
            self.warning_raised = True
            raise IdentityChangePendingError(
                "Changing the email changes the login identity. Save again to confirm."
            )
        self.warning_raised = False
