# i.e.: set to False only when debugging.
import os
import sys

USE_TIMEOUTS: bool = True
if "GITHUB_WORKFLOW" not in os.environ:
    if "pydevd" in sys.modules:
        USE_TIMEOUTS = False

# If USE_TIMEOUTS is None, this timeout should be used.
NO_TIMEOUT = None

DEFAULT_TIMEOUT = 15

# Interval used to check whether the caller of a pending request was cancelled.
CANCEL_POLL_INTERVAL = 1 / 20.0


def is_true_in_env(env_key):
    """
    :param str env_key:

    :return bool:
        True if the given key is to be considered to have a value which is to be
        considered True and False otherwise.
    """
    return os.getenv(env_key, "") in ("1", "True", "true")


# Options which must be set as environment variables.
ENV_OPTION_LSEDIT_DEBUG_EDITS = "LSEDIT_DEBUG_EDITS"

ENV_OPTION_LSEDIT_DEBUG_MESSAGES = "LSEDIT_DEBUG_MESSAGES"


class BaseOptions(object):
    log_file = None
    verbose: int = 0

    DEBUG_EDITS = is_true_in_env(ENV_OPTION_LSEDIT_DEBUG_EDITS)
    DEBUG_MESSAGES = is_true_in_env(ENV_OPTION_LSEDIT_DEBUG_MESSAGES)

    def __init__(self, args=None):
        """
        :param args:
            Instance with options to set (usually args from argparse).
        """
        if args is not None:
            for attr in dir(self):
                if not attr.startswith("_"):
                    if hasattr(args, attr):
                        setattr(self, attr, getattr(args, attr))


class Setup(object):
    # Replaced by the embedding application with its own options.
    options = BaseOptions()
