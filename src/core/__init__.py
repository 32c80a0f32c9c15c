"""Core de NeuraLearn: dominio, recuperación de salida IA y orquestación.

Por qué:
- No conoce HTTP, CLI ni SDKs concretos; depende solo de interfaces.
"""
