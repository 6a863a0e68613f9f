"""
expensebook — арифметическое ядро приложения личных финансов.

Калькулятор поля суммы, оценка погашения займов и срочные вклады.
"""

__version__ = "0.1.0"
