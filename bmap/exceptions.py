"""BMap exceptions.

This module defines the exception hierarchy for the bmap package.
All exceptions raised by the library inherit from :class:`BMapException`.

Absence of a key is never an error for :meth:`BMap.delete`,
:meth:`BMap.b_delete` or :meth:`BMap.b_get`. Exceptions raised by
user-supplied callbacks (listeners, predicates, comparators, resolvers)
are never wrapped; they propagate to the caller unchanged.

Example:
    Handling bmap exceptions::

        from bmap.exceptions import (
            BMapException,
            IllegalArgumentException,
            IllegalStateException,
        )

        try:
            my_map.on("changed", listener)
        except IllegalArgumentException:
            print("Unknown event kind")
        except BMapException as e:
            print(f"BMap error: {e}")
"""


class BMapException(Exception):
    """Base class for all bmap exceptions.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.

    Example:
        >>> try:
        ...     config = BMapConfig.from_yaml("missing.yml")
        ... except BMapException as e:
        ...     print(f"Error: {e}")
    """

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class IllegalStateException(BMapException):
    """Raised when an operation is invoked on an illegal state.

    Example:
        - Mutating a map from inside one of its own listeners while the
          map is configured with ``ReentrancyPolicy.FORBID``
    """
    pass


class IllegalArgumentException(BMapException):
    """Raised when an illegal or inappropriate argument is passed.

    Example:
        - Subscribing to an event kind other than add, update or delete
        - Registering a listener that is not callable
        - Passing both ``compare`` and ``key`` to :meth:`BMap.sort`
    """
    pass


class ConfigurationException(BMapException):
    """Raised when there is a configuration error.

    Example:
        - Negative indent in the serialization configuration
        - Unknown reentrancy policy name
        - Missing or unparsable YAML configuration file
    """
    pass


class BMapSerializationException(BMapException):
    """Raised when serialization or deserialization fails.

    Example:
        - A value that the JSON encoder cannot represent
        - Input that is not a JSON array of two-element pairs
    """
    pass
