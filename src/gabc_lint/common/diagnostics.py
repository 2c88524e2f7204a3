from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict

from gabc_lint.common.ir import Range

SOURCE = "gabc-lint"


class Severity(IntEnum):
    # LSP numbering
    ERROR = 1
    WARNING = 2
    INFORMATION = 3


class DiagnosticCode(str, Enum):
    # headers
    MISSING_NAME = "missing_name"
    EMPTY_NAME = "empty_name"
    MULTIPLE_HEADERS = "multiple_headers"
    TOO_MANY_ANNOTATIONS = "too_many_annotations"
    INVALID_HEADER = "invalid_header"
    INVALID_NABC_LINES = "invalid_nabc_lines"

    # alternation
    INVALID_PIPE_WITHOUT_NABC = "invalid_pipe_without_nabc"
    NABC_IN_GABC_ONLY_MODE = "nabc_in_gabc_only_mode"
    ALTERNATION_VIOLATION = "alternation_violation"

    # gabc notation
    INVALID_PITCH = "invalid_pitch"
    INVALID_CLEF_LINE = "invalid_clef_line"
    UNRECOGNIZED_CHARACTER = "unrecognized_character"

    # structure
    EMPTY_SYLLABLE = "empty_syllable"
    MISSING_MUSIC = "missing_music"

    # tags
    UNCLOSED_TAG = "unclosed_tag"
    UNMATCHED_CLOSING_TAG = "unmatched_closing_tag"

    # rendering
    QUILISMA_GLYPH_BREAK = "quilisma_glyph_break"
    QUILISMA_ASCENDING_MOTION = "quilisma_ascending_motion"
    QUILISMA_NO_FOLLOWING_NOTE = "quilisma_no_following_note"
    LARGE_AMBITUS = "large_ambitus"
    LINEBREAK_FIRST_SYLLABLE = "linebreak_first_syllable"
    CLEF_CHANGE_FIRST_SYLLABLE = "clef_change_first_syllable"
    ELISION_AT_SCORE_START = "elision_at_score_start"
    DUPLICATE_CENTER = "duplicate_center"
    DUPLICATE_PROTRUSION = "duplicate_protrusion"
    CENTER_AFTER_PROTRUSION = "center_after_protrusion"

    # nabc grammar
    UNKNOWN_GLYPH = "unknown_glyph"
    FONT_INCOMPATIBILITY = "font_incompatibility"
    UNUSUAL_MODIFIER = "unusual_modifier"
    HIGH_MODIFIER_VARIANT = "high_modifier_variant"
    EXCESSIVE_MODIFIERS = "excessive_modifiers"
    HIGH_SUBPUNCTIS_COUNT = "high_subpunctis_count"
    LAON_MODIFIER_ERROR = "laon_modifier_error"
    INVALID_SUBPUNCTIS_MODIFIER = "invalid_subpunctis_modifier"
    UNKNOWN_LETTER = "unknown_letter"
    LETTER_FONT_INCOMPATIBILITY = "letter_font_incompatibility"
    TIRONIAN_FONT_ERROR = "tironian_font_error"
    INVALID_LETTER_POSITION = "invalid_letter_position"
    DUPLICATE_LETTER_POSITION = "duplicate_letter_position"
    MISSING_COMPOUND_PITCH = "missing_compound_pitch"
    UNUSUAL_MODIFIER_COMBINATION = "unusual_modifier_combination"
    EXCESSIVE_SPACING = "excessive_spacing"


# Upstream gregorio compiler texts; printf placeholders are filled with `%` formatting.
PIPE_WITHOUT_NABC_LINES = (
    'You used character "|" in gabc without setting "nabc-lines" parameter. '
    "Please set it in your gabc header."
)
NABC_WITHOUT_ALTERNATION = (
    "NABC notation detected without proper alternation. "
    "Verify nabc-lines configuration and alternation pattern."
)
UNRECOGNIZED_CHARACTER = "unrecognized character"
NO_NAME_SPECIFIED = (
    "no name specified, put `name:...' at the beginning of the file, "
    "can be dangerous with some output formats"
)
NAME_CANNOT_BE_EMPTY = "name can't be empty"
TOO_MANY_ANNOTATIONS = "too many definitions of annotation found, only the first %d will be taken"
MULTIPLE_HEADER_DEFINITIONS = "several %s definitions found, only the last will be taken into consideration"
INVALID_PITCH = "invalid pitch for %u lines: %c"
INVALID_CLEF_LINE = "invalid clef line for %u lines: %d"
SYLLABLE_ALREADY_HAS_CENTER = "syllable already has center; ignoring additional center"
CENTER_NOT_ALLOWED_AFTER_PROTRUSION = "center not allowed after protrusion; ignored"
SYLLABLE_ALREADY_HAS_PROTRUSION = "syllable already has protrusion; pr tag ignored"
LARGE_AMBITUS = (
    "Encountered the need to switch DET_END_OF_CURRENT to DET_END_OF_BOTH "
    "because of overly large ambitus"
)
LINE_BREAK_NOT_SUPPORTED_FIRST_SYLLABLE = "line break is not supported on the first syllable"
CLEF_CHANGE_NOT_SUPPORTED_FIRST_SYLLABLE = "clef change is not supported on the first syllable"
ELISION_AT_SCORE_INITIAL = "score initial may not be in an elision"
UNCLOSED_TAG = "unclosed tag: <%s>"
UNMATCHED_CLOSING_TAG = "unmatched closing tag: </%s>"


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    range: Range
    severity: Severity
    message: str
    code: DiagnosticCode
    source: str = SOURCE


def error(range_: Range, code: DiagnosticCode, message: str) -> Diagnostic:
    return Diagnostic(range=range_, severity=Severity.ERROR, message=message, code=code)


def warning(range_: Range, code: DiagnosticCode, message: str) -> Diagnostic:
    return Diagnostic(range=range_, severity=Severity.WARNING, message=message, code=code)


def information(range_: Range, code: DiagnosticCode, message: str) -> Diagnostic:
    return Diagnostic(range=range_, severity=Severity.INFORMATION, message=message, code=code)
