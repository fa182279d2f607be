from hostsfile import parser
from hostsfile import serializer
from hostsfile import validator

__all__ = [
    "parser",
    "serializer",
    "validator",
]
