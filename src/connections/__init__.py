"""Описание удалённых целей и хранение активного подключения."""
