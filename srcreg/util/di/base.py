from dishka import Provider as DishkaProvider

from srcreg.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all srcreg DI providers. Factories default to the APP scope."""

    scope = Scope.APP
