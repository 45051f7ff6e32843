# SPDX-FileCopyrightText: 2025-present linuxdaemon <linuxdaemon.irc@gmail.com>
#
# SPDX-License-Identifier: MIT
__version__ = "0.1.0"
