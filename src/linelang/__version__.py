#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the version of linelang."""

__version__ = "0.3.0"
