from .trigger import TriggerTable
