# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
from functools import wraps


class descript(object):
    """Descriptor that unlocks the object under `lockattr` before calling the
    wrapped method and locks it again afterwards.
    """
    def __init__(self, f, lockattr):
        self.f = f
        self.lockattr = lockattr

    def __get__(self, instance, klass):
        if instance is None:
            return self.make_unbound(klass)
        return self.make_bound(instance)

    def make_unbound(self, klass):
        @wraps(self.f)
        def wrapper(*args, **kwargs):
            raise TypeError(
                'unbound method %s() must be called with %s instance '
                'as first argument (got nothing instead)'
                %
                (self.f.__name__, klass.__name__)
            )
        return wrapper

    def make_bound(self, instance):
        @wraps(self.f)
        def wrapper(*args, **kwargs):
            attr = getattr(instance, self.lockattr)
            if attr is not None:
                attr.unlock()
            try:
                ret = self.f(instance, *args, **kwargs)
            finally:
                attr = getattr(instance, self.lockattr)
                if attr is not None:
                    attr.lock()
            return ret
        # This instance does not need the descriptor anymore,
        # let it find the wrapper directly next time:
        setattr(instance, self.f.__name__, wrapper)
        return wrapper


def prepare_states(f):
    '''
    Class method decorator unlocking and locking the states object.

    It uses a descriptor to delay the definition of the method wrapper.
    '''

    return descript(f, "states")


def prepare_rates(f):
    '''
    Class method decorator unlocking and locking the rates object.

    It uses a descriptor to delay the definition of the method wrapper.
    '''

    return descript(f, "rates")
