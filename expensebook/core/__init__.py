"""
Core для expensebook: числовые модули, доменные модели, отчёты.

Чистые функции без состояния: без I/O, хранения и UI.
"""
