registry = {}


def make(id, *args, **kwargs):
    if id not in registry:
        raise KeyError(f"no maze generator registered as {id!r}, known: {sorted(registry)}")
    return registry[id](*args, **kwargs)


def register(id, obj=None):
    if obj is None:
        def wrap(obj):
            registry[id] = obj
            return obj

        return wrap
    else:
        registry[id] = obj
