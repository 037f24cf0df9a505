"""Подсистема настроек: реестр, группы и валидаторы."""
