class CourseplanError(Exception):
    """Base class for errors raised by courseplan."""

    pass


class DataConsistencyError(CourseplanError):
    """Raised when resolved section data contradicts itself (overlapping meetings within a day, sections without times)."""

    pass


class MissingCourseError(CourseplanError):
    """Raised when a required course is not present in the catalog."""

    def __init__(self, missing):
        self.missing = list(missing)
        names = ", ".join(f"{dept}-{num}" for dept, num in self.missing)
        super().__init__(f"Required course(s) not found in catalog: {names}")


class SectionParseError(CourseplanError):
    """Raised when a section listing cannot be read."""

    pass
