# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exit codes of the `releasemeta` command.

  0  the record decoded, or the install verified
  1  bad arguments or unreadable input files
  2  the --config file is missing or invalid
  3  unexpected failure inside a command
  4  the record, payload, host or installed files failed validation

Scripts wrapping `releasemeta verify` can treat 4 as "don't launch this
install" and everything else above 0 as "could not tell".
"""

from releasemeta.verification.verifier import VerificationResult

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
VALIDATION_ERROR: int = 4


def verification_exit_code(result: VerificationResult) -> int:
    """SUCCESS only for a compatible host whose declared files all matched."""
    return SUCCESS if result.is_valid else VALIDATION_ERROR
