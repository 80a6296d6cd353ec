class DeliveryRoutingError(RuntimeError):
    """Base class of all errors raised by delivery_routing."""

    pass


class MapLoadError(DeliveryRoutingError):
    """Raised if map or deliveries data are unreadable or malformed."""

    pass


class RoutingError(DeliveryRoutingError):
    """Raised if no path can be produced between two coordinates."""

    pass


class BadCoordinateError(RoutingError):
    """Raised if a routing endpoint has no entry in the street graph."""

    def __init__(self, coordinate=None):
        self.coordinate = coordinate
        super().__init__(f"coordinate not in street graph: {coordinate}")


class NoRouteError(RoutingError):
    """Raised if search exhausts the frontier without reaching the target."""

    def __init__(self, start=None, end=None):
        self.start = start
        self.end = end
        super().__init__(f"no route from {start} to {end}")
