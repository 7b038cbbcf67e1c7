"""
symbol defines the symbolic tag type used for representation names and
field types.
"""

__all__ = ("Symbol",)


class Symbol(str):
    """A normalized symbolic tag such as `:integer`.

    Symbol is a `str` so it hashes and compares equal to the plain string;
    a mapping keyed by `Symbol("user")` can be looked up with `"user"`.
    """

    __slots__ = ()

    def __new__(cls, value):
        if isinstance(value, Symbol):
            return value
        if not isinstance(value, str) or value == "":
            raise ValueError(f"Cannot make a symbol out of {value!r}")

        return super().__new__(cls, value)

    def __repr__(self):
        return f":{str(self)}"
