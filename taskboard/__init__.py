"""Taskboard: task-management web backend with user registration and login."""

__version__ = "0.1.0"
