def _readonly_setter(self, name):
    full_classname = self.__class__.__module__
    if full_classname is None:
        full_classname = self.__class__.__qualname__
    else:
        full_classname += '.' + self.__class__.__qualname__
    raise ValueError(f'Property "{name}" of "{full_classname}" is read-only.')

class CasObject(object):
    """
    Base class for the annotation store and its views, so that clients can attach extra
    properties to them without subclassing
    """

    @classmethod
    def add_property(cls, name, default=None, getter=None, setter=None, doc=None):
        """
        Add a property accessible through self.{name}.

        Without a getter, the value is read from self._{name}, which defaults to `default`.
        Without a setter, the property is read-only.
        """

        if hasattr(cls, name):
            raise ValueError(f'Property by the name of {name} already exists in {cls}. Maybe you want to find another name?')

        if getter is None:
            setattr(cls, f'_{name}', default)
            getter = lambda self: getattr(self, f'_{name}')
        if setter is None:
            setter = lambda self, value: _readonly_setter(self, name)

        setattr(cls, name, property(getter, setter, doc=doc))
