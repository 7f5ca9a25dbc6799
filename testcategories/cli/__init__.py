"""Command-line interface modules.

Available Commands:
-------------------

configure
    Validate enforcement configuration and print it as JSON.

    Usage:
        test-categories configure [--config FILE] [-D KEY=VALUE ...]

evaluate
    Replay a recorded results file through timing, hermeticity and
    distribution enforcement and emit the suite report as JSON.

    Usage:
        test-categories evaluate --results FILE [--config FILE] [-D KEY=VALUE ...]
            [--output FILE]

    Exit codes: 0 pass/warn, 1 fail, 2 invalid input.

Configuration:
--------------

Modes default to OFF for every domain. Set them in the JSON file's
"modes" object or with properties:

    -D testCategories.timingMode=WARN
    -D testCategories.hermeticityMode=STRICT
    -D testCategories.distributionMode=WARN
    -D testCategories.distribution.small.min=0.8

Global options --log-level and --log-file go before the subcommand.
"""
