import sys

from rich.pretty import pprint

from ordinary import *


@option(alias="n", default="0", duplicate_handling="first-wins")
def count(value):
    return int(value)


options = (
    Flag("all", alias="a"),
    Flag("verify", default=True),
    Option("message", alias="m", default=""),
    Option("author", default=""),
    Option("tags", alias="t", default=[], duplicate_handling="accumulate"),
    count,
)


if __name__ == '__main__':
    pprint(parse(sys.argv[1:], options, shell=True, fancy=True))
