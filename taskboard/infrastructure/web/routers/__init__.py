from . import tasks, departments

__all__ = ["tasks", "departments"]
