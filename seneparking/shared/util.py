def ensure(t, allow_none=False):
    '''Returns a function that ensures a result of type t
    e.g. ensure(Location)(Location(1.0, 2.0)) == ensure(Location)({'latitude': 1.0, 'longitude': 2.0})

    Useful for nested attrs that you want to load from JSON.
    '''
    def check(t2):
        if isinstance(t2, t):
            return t2
        elif isinstance(t2, dict):
            return t(**t2)
        elif allow_none and t2 is None:
            return None
        else:
            raise TypeError('Expected mapping or {}'.format(t))
    return check


def validate_pos(cls, attribute, value: float) -> None:
    if value <= 0:
        raise ValueError('{} must be positive'.format(attribute.name))


def validate_non_neg(cls, attribute, value: float) -> None:
    if value < 0:
        raise ValueError('{} must be non-negative'.format(attribute.name))


def enforce_type(cls, attribute, value) -> None:
    # bool is an int subclass, but a flag is never a count
    if not isinstance(value, attribute.type) or (isinstance(value, bool) and attribute.type is not bool):
        raise TypeError('{} must be of type {}'
                        .format(attribute.name, str(attribute.type)))
