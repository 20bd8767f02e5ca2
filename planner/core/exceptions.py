"""Domain exceptions raised by the service layer."""


class PlannerError(Exception):
    """Base class for errors the API layer knows how to report."""

    code = "PLANNER_ERROR"


class NotFoundError(PlannerError):
    """
    Запрошенная запись не существует.

    Сообщение всегда содержит id, чтобы по логам было понятно,
    что именно искали:
        raise NotFoundError("Task", "3f2a...")
        # "Task with id 3f2a... not found"
    """

    code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} with id {resource_id} not found")
