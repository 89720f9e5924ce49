# SPDX-License-Identifier: MIT
"""Application services for the vulx CLI.

Services implement the orchestration logic, coordinating between the domain
layer (core/) and infrastructure (platform/).
"""

from vulx.services.compose import CommandLine, ComposedCommand, Mode, compose
from vulx.services.dispatch import Dispatcher, Verb, parse_verb
from vulx.services.provision import ProvisionService, provision

__all__ = [
    # compose
    "CommandLine",
    "ComposedCommand",
    "Mode",
    "compose",
    # dispatch
    "Dispatcher",
    "Verb",
    "parse_verb",
    # provision
    "ProvisionService",
    "provision",
]
