# SPDX-FileCopyrightText: 2025-present linuxdaemon <linuxdaemon.irc@gmail.com>
#
# SPDX-License-Identifier: MIT
import sys

if __name__ == "__main__":
    from av1_convert.cli import av1_convert

    sys.exit(av1_convert())
