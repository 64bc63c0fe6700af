"""Выполнение команд на удалённом хосте через SSH."""
