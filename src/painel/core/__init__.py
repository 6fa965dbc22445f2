"""
Core Domain Layer - O Hexágono.

Este pacote contém a lógica de negócio pura, sem dependências de frameworks.
Características:
- Zero dependências externas (Django, httpx, Celery)
- 100% testável sem banco de dados ou rede
- Agnóstico ao backend-as-a-service usado para persistência
"""
