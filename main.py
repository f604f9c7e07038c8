import logging

from zonesync import DomainFilter, provider_from_env
from zonesync.base.logger import zs_logger


def main():
    # Example usage: list the managed records of example.com without touching anything
    zs_logger.logger.setLevel(logging.DEBUG)
    provider = provider_from_env(DomainFilter(["example.com"]), dry_run=True)

    with provider.client:
        for endpoint in provider.records():
            print(endpoint)

if __name__ == "__main__":
    main()
