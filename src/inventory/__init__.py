"""Инвентаризация контейнеров: команды, разбор вывода и сервис."""
