"""Exception types shared across bufed."""


class ContractViolation(Exception):
    """A caller passed a cursor, row or position outside the documented range.

    These are programmer errors: cursor movement never produces such a
    coordinate, so nothing inside bufed catches this exception.
    """
