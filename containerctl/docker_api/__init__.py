"""Тонкий адаптер над docker SDK: клиент и операции по ресурсам."""
