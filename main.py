import sys

from rich.pretty import pprint

from flagpole import *

__prog__ = "copy"

spec = (
    Specification()
    .with_command("copy")
    .with_header("copy files into a directory")
    .with_help_flag()
    .with_verbose_flag()
    .option("o", "output").with_parameter("dir").with_description("target directory").done()
    .option("n", "retries").with_parameter("count").with_pattern(r"\d+").optional().with_description(
        "how often a failed copy is retried\ndefaults to 3"
    ).done()
    .positional("files").variadic().with_description("files to copy").done()
)


if __name__ == '__main__':
    parsed = spec.parse(sys.argv[1:])
    if parsed.is_empty() or parsed.is_help():
        spec.print_help()
        sys.exit(0)
    parsed.validate(shell=True)
    pprint({
        "output": parsed.option_parameter_as_path("output"),
        "retries": parsed.option_parameter_as_int("retries", 3),
        "files": parsed.positionals_as_paths(),
        "verbose": parsed.is_verbose(),
    })
