"""Seed definitions for enumerated reference data.

Status and function codes are fixed by these tables. Seeding inserts
missing codes and never rewrites codes that already exist.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StatusCodeSeed:
    """Seed row for a location status code."""

    code: str
    description: str


@dataclass(frozen=True)
class FunctionCodeSeed:
    """Seed row for a location function code."""

    code: str
    name: str
    description: str


STATUS_CODE_SEEDS: tuple[StatusCodeSeed, ...] = (
    StatusCodeSeed("AA", "Approved by competent national government agency"),
    StatusCodeSeed("AM", "Ambiguous / Missing definition"),
    StatusCodeSeed("AC", "Approved by Customs Authority"),
    StatusCodeSeed("AF", "Approved by other official body"),
    StatusCodeSeed("AI", "Approval initiated"),
    StatusCodeSeed("AS", "Assigned - not fully validated"),
    StatusCodeSeed("RL", "Recognized location - not officially approved"),
    StatusCodeSeed("RQ", "Request under consideration"),
    StatusCodeSeed("UR", "Under review"),
    StatusCodeSeed("RR", "Request for removal"),
    StatusCodeSeed("RN", "Registered (not yet active)"),
    StatusCodeSeed("QQ", "Questionable data"),
    StatusCodeSeed("XX", "Removed from publication"),
)

FUNCTION_CODE_SEEDS: tuple[FunctionCodeSeed, ...] = (
    FunctionCodeSeed(
        "1",
        "Port (Sea)",
        "Location functions as a maritime sea port handling cargo and passengers.",
    ),
    FunctionCodeSeed(
        "2",
        "Rail Terminal",
        "Location serves as a railway terminal for the loading and unloading "
        "of goods or passengers.",
    ),
    FunctionCodeSeed(
        "3",
        "Road Terminal",
        "Location functions as a road-based cargo or bus terminal for overland transportation.",
    ),
    FunctionCodeSeed(
        "4",
        "Airport",
        "Location is an airport handling air freight and/or passenger services.",
    ),
    FunctionCodeSeed(
        "5",
        "Postal Exchange Office",
        "Location is used as an international or domestic postal mail exchange center.",
    ),
    FunctionCodeSeed(
        "6",
        "Inland Clearance Depot (ICD) / Dry Port",
        "Location functions as a dry port or inland terminal for customs clearance "
        "and intermodal transfers.",
    ),
    FunctionCodeSeed(
        "7",
        "Fixed Transport Facility",
        "Permanent transport location like pipeline terminals or offshore oil platforms.",
    ),
)
