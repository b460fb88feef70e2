class GuideTreeError(Exception):
    pass


class DataError(GuideTreeError):
    pass


class MalformedInputError(DataError):
    pass


class DegenerateScorerError(DataError, ZeroDivisionError):
    pass


class ChildIndexError(GuideTreeError, IndexError):
    pass


class UnsupportedOperationError(GuideTreeError, NotImplementedError):
    pass


class LogError(GuideTreeError):
    pass
