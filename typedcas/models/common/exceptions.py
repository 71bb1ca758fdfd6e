"""
Errors raised by the type catalog and the annotation store

All of them are reported straight to the caller.  Where it makes sense
they subclass the builtin exception a caller would naturally catch,
so `except KeyError` still works for a missing handle, for example.
"""

class InvalidRangeError(ValueError):
    """ begin/end offsets violate 0 <= begin <= end <= len(text) """

    def __init__(self, begin, end, length):
        super().__init__(f"Invalid annotation range [{begin}, {end}) for a text of length {length}")
        self.begin = begin
        self.end = end
        self.length = length

class UnknownHandleError(KeyError):
    def __init__(self, handle):
        super().__init__(f"Handle {handle} does not belong to this annotation store")
        self.handle = handle

class UnknownTypeError(KeyError):
    def __init__(self, type_name):
        super().__init__(f"Type {type_name} is not registered in this type catalog")
        self.type_name = type_name

class AmbiguousTypeError(ValueError):
    def __init__(self, short_name, candidates):
        super().__init__(f"Short type name {short_name} is ambiguous.  Use one of: {', '.join(sorted(candidates))}")
        self.short_name = short_name
        self.candidates = candidates

class UnknownFeatureError(KeyError):
    def __init__(self, type_name, feature_name):
        super().__init__(f"Type {type_name} has no feature named {feature_name}")
        self.type_name = type_name
        self.feature_name = feature_name

class TypeSystemError(ValueError):
    """ The type hierarchy or a feature declaration is inconsistent """
