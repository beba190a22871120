# /core/exceptions.py

class FeeError(Exception):
    pass

class InvalidInput(FeeError, ValueError):
    pass

class InvalidArgument(FeeError, ValueError):
    pass

class InvalidAmount(InvalidArgument):
    pass

class ConfigurationError(InvalidArgument):
    pass

class NoApplicableRule(FeeError, LookupError):
    pass
