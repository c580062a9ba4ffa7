class UIKeys:
    """Keys for UI widgets in ``st.session_state``."""

    LANG_SELECT = "ui.lang_select"
    ROOM_TITLE = "ui.room.title"
    MODE_SELECT = "ui.room.mode"
    PRICE_RANGE = "ui.room.price_range"
    RADIUS = "ui.room.radius"
    CUISINES = "ui.room.cuisines"
    RECIPE_DIFFICULTY = "ui.room.recipe_difficulty"
    PARTICIPANT_LIMIT = "ui.room.participant_limit"
    ACCESS_CONTROL = "ui.room.access_control"
    TIMER_OPTION = "ui.room.timer_option"
    CUSTOM_DURATION = "ui.room.custom_duration"
    DURATION_UNIT = "ui.room.duration_unit"
    DEADLINE = "ui.room.deadline"
    REMINDERS = "ui.room.reminders"
    CONTACT_SEARCH = "ui.room.contact_search"
    SAVE_AS_TEMPLATE = "ui.room.save_as_template"
    TEMPLATE_NAME = "ui.room.template_name"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    LANG = "lang"
    CONTEXT_MODE = "room.context_mode"
    RESUME_STEP = "room.resume_step"
    CREATED_ROOM = "room.created"
    WIZARD_DISMISSED = "room.wizard_dismissed"
    SESSION_ID = "room.session_id"
