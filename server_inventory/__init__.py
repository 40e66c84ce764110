"""
Server Inventory.

Модели инвентаризации серверов и виртуальных машин: сетевые интерфейсы,
IP/VLAN, физические хосты, лицензирование и экспорт во внешнюю
систему учёта активов.
"""

__version__ = "1.0.0"
