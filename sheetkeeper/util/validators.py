from sheetkeeper.core.error import DomainErrorCode, SheetDomainError
from sheetkeeper.schemas.character import ControlItem, UpdateControlsRequest

MAX_CHARACTER_NAME_LENGTH = 100
MAX_GAME_NAME_LENGTH = 100
MAX_CONTROLS = 100
MAX_CONTROL_NAME_LENGTH = 200
MAX_CONTROL_INFO_LENGTH = 1000


def _invalid(message: str, **details: object) -> SheetDomainError:
    return SheetDomainError(
        code=DomainErrorCode.VALIDATION_FAILED,
        message=message,
        details=details,
    )


def validate_character_name(character_name: str) -> str:
    if not character_name.strip():
        raise _invalid(
            "Character name cannot be empty",
            character_name=character_name,
        )

    if len(character_name) > MAX_CHARACTER_NAME_LENGTH:
        raise _invalid(
            f"Character name exceeds maximum length of "
            f"{MAX_CHARACTER_NAME_LENGTH} characters",
            character_name=character_name,
            length=len(character_name),
        )

    return character_name


def validate_game_name(game: str) -> str:
    if not game.strip():
        raise _invalid("Game name cannot be empty", game=game)

    if len(game) > MAX_GAME_NAME_LENGTH:
        raise _invalid(
            f"Game name exceeds maximum length of {MAX_GAME_NAME_LENGTH} characters",
            game=game,
            length=len(game),
        )

    return game


def validate_field_key(field_key: str) -> str:
    if not field_key:
        raise _invalid("Field key cannot be empty", field_key=field_key)
    return field_key


def validate_control(control: ControlItem, index: int) -> ControlItem:
    if not control.name.strip():
        raise _invalid("Control name cannot be empty", index=index)

    if len(control.name) > MAX_CONTROL_NAME_LENGTH:
        raise _invalid(
            f"Control name exceeds maximum length of "
            f"{MAX_CONTROL_NAME_LENGTH} characters",
            index=index,
            length=len(control.name),
        )

    if not control.type.strip():
        raise _invalid("Control type cannot be empty", index=index)

    if len(control.info) > MAX_CONTROL_INFO_LENGTH:
        raise _invalid(
            f"Control info exceeds maximum length of "
            f"{MAX_CONTROL_INFO_LENGTH} characters",
            index=index,
            length=len(control.info),
        )

    return control


def validate_controls(controls: list[ControlItem]) -> list[ControlItem]:
    if len(controls) > MAX_CONTROLS:
        raise _invalid(
            f"Too many controls (maximum {MAX_CONTROLS})",
            count=len(controls),
        )

    for index, control in enumerate(controls):
        validate_control(control, index)

    return controls


def validate_controls_request(request: UpdateControlsRequest) -> UpdateControlsRequest:
    validate_character_name(request.character_name)
    validate_game_name(request.game)
    validate_controls(request.controls)
    return request


def validate_quantity(quantity: int, minimum: int = 1) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise _invalid("Quantity must be an integer", quantity=quantity)

    if quantity < minimum:
        raise _invalid(
            f"Quantity must be at least {minimum}",
            quantity=quantity,
        )

    return quantity
