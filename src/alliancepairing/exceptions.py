"""Exceptions for use in Alliance Pairing"""

# Alliance Pairing
# Copyright (C) 2025  Alliance Pairing developers
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


# ========== Base Application Exception ==========


class AlliancePairingException(Exception):
    """Base exception for all Alliance Pairing errors.

    All custom exceptions in the engine inherit from this class so callers
    can catch every engine error with a single except clause.
    """

    pass


# ========== Lookup Exceptions ==========


class NotFoundException(AlliancePairingException):
    """Base exception for entities missing from the store."""

    pass


class StageNotFoundException(NotFoundException):
    """Raised when a requested stage does not exist."""

    pass


class MatchNotFoundException(NotFoundException):
    """Raised when a requested match does not exist."""

    pass


class RecordNotFoundException(NotFoundException):
    """Raised when a team record cannot be found."""

    pass


# ========== State Exceptions ==========


class InvalidStateException(AlliancePairingException):
    """Base exception for operations attempted in the wrong state."""

    pass


class WrongStageTypeException(InvalidStateException):
    """Raised when an operation is invoked on a stage of the wrong type."""

    pass


class IncompleteMatchesException(InvalidStateException):
    """Raised when finalizing a stage that still has unfinished matches."""

    pass


class NoWinningAllianceException(InvalidStateException):
    """Raised when a match has no recorded winning alliance."""

    pass


class MatchNotCompletedException(InvalidStateException):
    """Raised when a match must be completed for the requested operation."""

    pass


class InvalidMatchTransitionException(InvalidStateException):
    """Raised on an illegal match lifecycle transition."""

    pass


# ========== Resource Exceptions ==========


class InsufficientResourcesException(AlliancePairingException):
    """Base exception for too few teams, records or fields."""

    pass


class InsufficientTeamsException(InsufficientResourcesException):
    """Raised when there are fewer teams than a single match needs."""

    pass


class InsufficientRankedTeamsException(InsufficientResourcesException):
    """Raised when fewer ranked teams exist than the bracket requires."""

    pass


class NoFieldsAvailableException(InsufficientResourcesException):
    """Raised when a tournament has no fields to assign matches to."""

    pass


# ========== Mapping Exceptions ==========


class MissingMappingException(AlliancePairingException):
    """Base exception for missing bracket edges."""

    pass


class NoAdvancementInfoException(MissingMappingException):
    """Raised when a match has no advancement entry (e.g. a final)."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(AlliancePairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
