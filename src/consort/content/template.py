"""The reference CONSORT template: five layers by four columns.

Layer 1 holds the enrolled population, layer 2 the two allocated arms,
layer 3 the four subgroups, layer 4 the exclusion annotations and
layer 5 the analysed subjects.  Fifteen of the twenty grid positions are
populated.
"""

from ..core.models import CellTemplate, ConsortTemplate, ExclusionTemplate

ARM_FIELD = "arm"
SUBGROUP_FIELD = "subgroup"
REASON_FIELD = "exclusion_reason"
ANALYSED_FIELD = "analysed"

EXCLUSION_REASONS = {
    1: "Lost to follow-up",
    2: "Discontinued intervention",
    3: "Withdrew consent",
}

_ARMS = {2: "A", 3: "B"}
_SUBGROUP_ARM = {1: 2, 2: 2, 3: 3, 4: 3}


def _subgroup_label(column: int) -> str:
    arm = _SUBGROUP_ARM[column]
    index = 1 if column % 2 else 2
    return f"Allocated to {_ARMS[arm]}{index}"


REFERENCE_TEMPLATE = ConsortTemplate(
    cells=(
        CellTemplate(layer=1, column=2, label="Enrolled", span=2),
        *(
            CellTemplate(
                layer=2,
                column=column,
                label=f"Randomised to arm {arm}",
                field=ARM_FIELD,
                parent=(1, 2),
            )
            for column, arm in _ARMS.items()
        ),
        *(
            CellTemplate(
                layer=3,
                column=column,
                label=_subgroup_label(column),
                field=SUBGROUP_FIELD,
                parent=(2, arm),
            )
            for column, arm in _SUBGROUP_ARM.items()
        ),
        *(
            CellTemplate(
                layer=5,
                column=column,
                label="Analysed",
                field=ANALYSED_FIELD,
                parent=(3, column),
                inbound_arrow=False,
            )
            for column in range(1, 5)
        ),
    ),
    exclusion=ExclusionTemplate(
        layer=4,
        source_field=SUBGROUP_FIELD,
        reason_field=REASON_FIELD,
        reasons=EXCLUSION_REASONS,
        columns=(1, 2, 3, 4),
    ),
)
