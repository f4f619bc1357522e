from typing import List, Optional
import logging
import sys

from gem5dev.config import Gem5DevConfig
from gem5dev.dispatch import Dispatcher
from gem5dev.errors import Gem5DevError, UsageError
from gem5dev.util.cli import Shell

# Front-end for the gem5-dev docker image:
#   docker run -v $GEM5_HOST_WORKDIR:/gem5 -it gem5-dev [<cmd>...]


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        format="%(levelname)s - %(filename)s:%(lineno)d - %(message)s", level=logging.INFO
    )
    argv = sys.argv[1:] if argv is None else argv

    config = Gem5DevConfig.from_env()
    dispatcher = Dispatcher(config, Shell())
    try:
        return dispatcher.dispatch(argv)
    except Gem5DevError as e:
        logging.error(e)
        if isinstance(e, UsageError):
            print()
            print(dispatcher.usage())
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
