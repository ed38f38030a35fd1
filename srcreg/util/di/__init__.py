from srcreg.util.di.base import Provider
from srcreg.util.di.scope import Scope

__all__ = ["Provider", "Scope"]
