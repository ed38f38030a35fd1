"""Auth domain model."""

from srcreg.domain.auth.model.identity import Anonymous, Identity, Principal
from srcreg.domain.auth.model.value import PrincipalId

__all__ = ["Anonymous", "Identity", "Principal", "PrincipalId"]
