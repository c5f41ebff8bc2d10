"""Types
"""
from typing import Union


RawURL = Union[str, bytes]
PrefixMap = list[tuple[str, bytes]]
