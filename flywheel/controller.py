class Controller:
    """Base class for controllers an application can drive.

    Applications only accept instances of this class (or its subclasses) as
    their active controller. Dispatching actions is left to the concrete
    framework layer.
    """

    @property
    def name(self) -> str:
        return type(self).__name__
