"""Top-differential to protocol-screen routing."""
from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_PROTOCOL_ROUTE = "/clinical-assessment"

PROTOCOL_ROUTES: Mapping[str, str] = MappingProxyType({
    "dka": "/clinical-assessment",
    "sepsis": "/clinical-assessment",
    "septic_shock": "/clinical-assessment",
    "eclampsia": "/eclampsia-protocol",
    "status_epilepticus": "/clinical-assessment",
    "anaphylaxis": "/clinical-assessment",
    "pulmonary_embolism": "/clinical-assessment",
    "hyperkalemia": "/clinical-assessment",
    "hypoglycemia": "/clinical-assessment",
    "postpartum_hemorrhage": "/postpartum-hemorrhage-protocol",
    "status_asthmaticus": "/asthma-emergency",
    "neonatal_sepsis": "/clinical-assessment",
})


def resolve_protocol_route(condition_id: Optional[str], default: str = DEFAULT_PROTOCOL_ROUTE) -> str:
    if condition_id is None:
        return default
    return PROTOCOL_ROUTES.get(condition_id, default)
