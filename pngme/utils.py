from typing import Union, get_args

Data = Union[bytes, bytearray]


def as_data(data: Data) -> bytes:
    if not isinstance(data, get_args(Data)):
        types = " or ".join(t.__name__ for t in get_args(Data))
        raise TypeError("Expected {}, not {}".format(types, type(data)))
    if not isinstance(data, bytes):
        data = bytes(data)
    return data
