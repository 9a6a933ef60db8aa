from .validator import Validator, make_validator

__all__ = ["Validator", "make_validator"]
