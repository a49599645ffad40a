from rich.pretty import pprint

from argtable import *

__prog__ = "main.py"

registry = Registry(
    flag("version", "v", "Display version information"),
    option("colour", "c", "Colour", ("red", "green", "blue")),
    option("number", "n", "Number of things", default="1"),
    positional("file", "File to read", ordinality=Ordinality.OPTIONAL),
)


if __name__ == '__main__':
    parser = Parser(registry, shell=True)
    namespace = parser.parse_argv()
    if namespace.is_set("version"):
        pprint(version_info)
    else:
        parser.help()
        pprint(namespace)
