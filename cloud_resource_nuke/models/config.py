"""Configuration from environment variables."""

import os

# Logging configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Executor pacing
RATE_LIMIT_COOLDOWN_SECONDS = int(os.environ.get("RATE_LIMIT_COOLDOWN_SECONDS", "60"))
BATCH_PAUSE_SECONDS = int(os.environ.get("BATCH_PAUSE_SECONDS", "10"))

# Countdown shown instead of the prompt when --force is given
FORCE_COUNTDOWN_SECONDS = int(os.environ.get("FORCE_COUNTDOWN_SECONDS", "10"))

# Inventory listing fan-out across regions (1 = sequential)
INVENTORY_MAX_WORKERS = int(os.environ.get("INVENTORY_MAX_WORKERS", "1"))

# boto3 waiters used after delete calls
WAITER_DELAY_SECONDS = int(os.environ.get("WAITER_DELAY_SECONDS", "15"))
WAITER_MAX_ATTEMPTS = int(os.environ.get("WAITER_MAX_ATTEMPTS", "40"))

# GCP project override (otherwise taken from the default credentials)
GOOGLE_CLOUD_PROJECT = os.environ.get("GOOGLE_CLOUD_PROJECT", "")

# Regions enabled by default on every AWS account.
# Regions launched after March 2019 must be opted in, so only these
# are safe to query before the enabled set is known.
OPT_IN_NOT_REQUIRED_REGIONS = (
    "eu-north-1",
    "ap-south-1",
    "eu-west-3",
    "eu-west-2",
    "eu-west-1",
    "ap-northeast-2",
    "ap-northeast-1",
    "sa-east-1",
    "ca-central-1",
    "ap-southeast-1",
    "ap-southeast-2",
    "eu-central-1",
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
)

# Regions where the EKS API is available
EKS_SUPPORTED_REGIONS = frozenset(
    {
        "us-east-1",
        "us-east-2",
        "us-west-2",
        "eu-central-1",
        "eu-west-1",
        "eu-west-2",
        "eu-west-3",
        "eu-north-1",
        "ap-southeast-1",
        "ap-southeast-2",
        "ap-northeast-1",
        "ap-northeast-2",
        "ap-south-1",
    }
)

# Word the operator must type to confirm
CONFIRMATION_WORD = "nuke"


class Config:
    """Configuration singleton."""

    def __init__(self):
        self.log_level = LOG_LEVEL
        self.rate_limit_cooldown_seconds = RATE_LIMIT_COOLDOWN_SECONDS
        self.batch_pause_seconds = BATCH_PAUSE_SECONDS
        self.force_countdown_seconds = FORCE_COUNTDOWN_SECONDS
        self.inventory_max_workers = INVENTORY_MAX_WORKERS
        self.waiter_delay_seconds = WAITER_DELAY_SECONDS
        self.waiter_max_attempts = WAITER_MAX_ATTEMPTS
        self.google_cloud_project = GOOGLE_CLOUD_PROJECT
        self.opt_in_not_required_regions = OPT_IN_NOT_REQUIRED_REGIONS
        self.eks_supported_regions = EKS_SUPPORTED_REGIONS
