"""Разбор аргументов командной строки и обработчики команд."""
