"""
Pydantic request/response schemas.

JSON keys keep the natural-language column names ("Customer Id",
"Type of Dish"); Python attributes are snake_case. Every schema accepts
either form on input and emits the aliases on output.
"""
