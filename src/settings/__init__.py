"""Подсистема настроек приложения."""
