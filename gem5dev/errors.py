class Gem5DevError(Exception):
    """A fatal, user-correctable condition. The process exits with [exit_code]."""

    exit_code = 1


class HostDirNotMountedError(Gem5DevError):
    pass


class MissingArtifactError(Gem5DevError):
    pass


class UsageError(Gem5DevError):
    """Bad command line; usage text is printed after the message."""

    pass
