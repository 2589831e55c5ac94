from .models import DogCounts, OrderConfig, SizeClass

SIZE_CLASSES: tuple[SizeClass, ...] = ("small", "medium", "large")


def monthly_need(counts: DogCounts, config: OrderConfig) -> float:
    """Pounds of food the current dogs eat in one month."""
    return sum(counts.for_size(size) * config.consumption_for(size) for size in SIZE_CLASSES)
