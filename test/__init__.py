from contextlib import contextmanager


@contextmanager
def patch(owner, attr, value):
    """Monkey patch context manager.

    with patch(pipeline, 'list_vms', fake_list_vms):
        ...
    """
    old = getattr(owner, attr)
    setattr(owner, attr, value)
    try:
        yield getattr(owner, attr)
    finally:
        setattr(owner, attr, old)
