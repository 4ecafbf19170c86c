"""
Service identification for log lines.

Every line carries `service@env:instance` so logs from several API workers and
the scheduler process can be told apart once they land in one place.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'seat-scheduling')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    # Container hostname when orchestrated, PID on a laptop
    instance = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance}'
