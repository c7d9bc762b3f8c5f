from collections.abc import Callable

# Returns the current time as epoch milliseconds
Clock = Callable[[], int]
