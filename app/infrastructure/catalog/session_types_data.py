from app.domain.entities.session_type import SessionType

SESSION_TYPES: dict[str, SessionType] = {
    "portrait": SessionType(
        key="portrait",
        display_name="Portrait",
        price=3000,
        description="Individual portrait session, studio or outdoor.",
    ),
    "couple": SessionType(
        key="couple",
        display_name="Couple",
        price=4000,
        description="Session for two, including love story shoots.",
    ),
    "wedding": SessionType(
        key="wedding",
        display_name="Wedding",
        price=15000,
        description="Wedding day coverage. Final hours agreed after booking.",
    ),
    "editorial": SessionType(
        key="editorial",
        display_name="Editorial",
        price=5000,
        description="Fashion and brand editorial shoots.",
    ),
}
