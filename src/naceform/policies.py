"""
Built-in compilation policies.

    exclusive-primary          one track, checkbox sections, radiogroup below
    exclusive-primary-single   one track, radiogroup everywhere
    dual                       SINGULAR (radiogroup) then PLURAL (checkbox)
    gated-applicability        boolean-gated PRIMARY (dropdown) then
                               boolean-gated ADDITIONAL (tagbox)

New variants are new Policy values; the compiler itself never changes.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from naceform.errors import PolicyConfigurationError
from naceform.model import QuestionType
from naceform.policy import GateConfig, LevelConfig, Policy, TrackConfig, operator_for


NACE = "Nomenclature of Economic Activities (NACE)"

PRIMARY_ROOT = "PRIMARY_NACE_CODE"
ADDITIONAL_ROOT = "ADDITIONAL_NACE_CODES"

# (unit, unit plural) per compiled depth
_UNITS = (
    ("category", "categories"),
    ("division", "divisions"),
    ("class", "classes"),
    ("activity", "activities"),
)


def _primary_texts() -> List[Tuple[str, str]]:
    return [
        (
            f"What was your organization’s primary {NACE} {unit} "
            f"as of the end of the current reporting period?",
            f"Organizations should select their primary NACE {unit} based on "
            f"the total revenue earned from the economic activity.",
        )
        for unit, _ in _UNITS
    ]


def _plural_texts() -> List[Tuple[str, str]]:
    return [
        (
            f"What were all of your organization’s {NACE} {plural} "
            f"as of the end of the current reporting period?",
            f"Organizations should select every NACE {unit} in which they "
            f"earned revenue during the current reporting period.",
        )
        for unit, plural in _UNITS
    ]


def _additional_texts() -> List[Tuple[str, str]]:
    texts = [
        (
            f"What were your organization’s additional {NACE} categories "
            f"as of the end of the current reporting period?",
            "Organizations should select every NACE category other than their "
            "primary one in which they earned revenue.",
        )
    ]
    for unit, plural in _UNITS[1:]:
        texts.append(
            (
                f"Which additional NACE {plural} under {{code}} - {{name}} "
                f"did your organization’s activities fall into?",
                f"Select every NACE {unit} under this branch in which your "
                f"organization earned revenue.",
            )
        )
    return texts


def build_levels(
    types: Sequence[QuestionType],
    texts: Sequence[Tuple[str, str]],
    gated: bool = False,
    per_node_titles: bool = False,
) -> Tuple[LevelConfig, ...]:
    """
    Build the four LevelConfigs of a track.

    The operator of each depth follows from the type of the depth above it;
    the root uses '=' against its boolean gate when `gated` is set.
    """
    levels = []
    for index, (question_type, (title, description)) in enumerate(zip(types, texts)):
        depth = index + 1
        if depth == 1:
            operator = operator_for(QuestionType.BOOLEAN) if gated else None
        else:
            operator = operator_for(types[index - 1])
        levels.append(
            LevelConfig(
                depth=depth,
                question_type=question_type,
                title=title,
                description=description,
                operator=operator,
                title_per_node=per_node_titles and depth > 1,
            )
        )
    return tuple(levels)


def exclusive_primary_policy(multi_select_root: bool = True) -> Policy:
    """
    Single track asking for the primary NACE code.

    With `multi_select_root` the section question is a checkbox; deeper
    questions are always radiogroups.
    """
    root_type = QuestionType.CHECKBOX if multi_select_root else QuestionType.RADIOGROUP
    types = [root_type] + [QuestionType.RADIOGROUP] * 3
    track = TrackConfig(
        key="PRIMARY",
        root_name=PRIMARY_ROOT,
        levels=build_levels(types, _primary_texts()),
    )
    name = "exclusive-primary" if multi_select_root else "exclusive-primary-single"
    return Policy(
        name=name,
        tracks=(track,),
        description="Primary NACE code, one branch per selected section",
    )


def dual_track_policy() -> Policy:
    """Singular (one code) track followed by a plural (many codes) track."""
    singular = TrackConfig(
        key="SINGULAR",
        root_name=f"{PRIMARY_ROOT}_SINGULAR",
        levels=build_levels([QuestionType.RADIOGROUP] * 4, _primary_texts()),
        suffix="_SINGULAR",
    )
    plural = TrackConfig(
        key="PLURAL",
        root_name=f"{PRIMARY_ROOT}_PLURAL",
        levels=build_levels([QuestionType.CHECKBOX] * 4, _plural_texts()),
        suffix="_PLURAL",
    )
    return Policy(
        name="dual",
        tracks=(singular, plural),
        description="Singular and plural NACE selection chains",
    )


def gated_applicability_policy() -> Policy:
    """
    Primary and additional tracks, each opened by a yes/no question.

    The additional track uses tagboxes throughout, and every deeper title
    names the branch it belongs to, since several branches can be open at once.
    """
    primary = TrackConfig(
        key="PRIMARY",
        root_name=PRIMARY_ROOT,
        levels=build_levels([QuestionType.DROPDOWN] * 4, _primary_texts(), gated=True),
        suffix="_PRIMARY",
        gate=GateConfig(
            name=f"{PRIMARY_ROOT}_applicability",
            title=f"Did your organization have a primary {NACE} code "
                  f"as of the end of the current reporting period?",
        ),
    )
    additional = TrackConfig(
        key="ADDITIONAL",
        root_name=ADDITIONAL_ROOT,
        levels=build_levels(
            [QuestionType.TAGBOX] * 4,
            _additional_texts(),
            gated=True,
            per_node_titles=True,
        ),
        suffix="_ADDITIONAL",
        gate=GateConfig(
            name=f"{ADDITIONAL_ROOT}_applicability",
            title=f"Did your organization have any additional {NACE} codes "
                  f"as of the end of the current reporting period?",
        ),
    )
    return Policy(
        name="gated-applicability",
        tracks=(primary, additional),
        description="Yes/no gated primary and additional NACE codes",
    )


POLICIES: Dict[str, Callable[[], Policy]] = {
    "exclusive-primary": exclusive_primary_policy,
    "exclusive-primary-single": lambda: exclusive_primary_policy(multi_select_root=False),
    "dual": dual_track_policy,
    "gated-applicability": gated_applicability_policy,
}


def get_policy(name: str) -> Policy:
    """
    Raises:
        PolicyConfigurationError: If no built-in policy has this name
    """
    factory: Optional[Callable[[], Policy]] = POLICIES.get(name)
    if factory is None:
        raise PolicyConfigurationError(
            f"Unknown policy '{name}'. Available: {', '.join(sorted(POLICIES))}"
        )
    return factory()
