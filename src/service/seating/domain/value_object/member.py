import attrs


@attrs.define(frozen=True)
class Member:
    """Authenticated requester, rebuilt from the bearer token without a DB lookup"""

    id: int
    name: str
    email: str
