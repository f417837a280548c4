from rich.pretty import pprint

from argot import *


spec = {
    "--file": str,
    "--count": int,
    "--tag": [str],
    "--verbose": COUNT,
    "--debug": bool,
    "-f": "--file",
    "-n": "--count",
    "-v": "--verbose",
    "-d": "--debug",
}


if __name__ == '__main__':
    pprint(parse(spec, shell=True, fancy=True))
