from .retry import (
    BackoffStrategy as BackoffStrategy,
    JitterStrategy as JitterStrategy,
    RetryConfig as RetryConfig,
    calculate_delay as calculate_delay,
)
