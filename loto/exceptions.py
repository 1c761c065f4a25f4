"""Domain errors raised by the services and mapped to {success: false} responses in main.py."""


class LotoError(Exception):
    """Base class for expected, user-facing failures."""


class NotFoundError(LotoError):
    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} #{entity_id} not found")
