"""Tournament management for Tesuji.

This package keeps the roster and round history of one tournament and threads
data between the pairing and rating engines.
"""

# Tesuji
# Copyright (C) 2026  Tesuji developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from tesuji.tournament.result_recorder import ResultRecorder
from tesuji.tournament.round_manager import RoundManager
from tesuji.tournament.tournament import Tournament

__all__ = [
    "Tournament",
    "RoundManager",
    "ResultRecorder",
]
