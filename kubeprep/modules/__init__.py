"""
Host provisioning modules.
"""
from .provisioner import Provisioner, ProvisionConfig, SystemHost, DryRunHost, provision

__all__ = [
    'Provisioner',
    'ProvisionConfig',
    'SystemHost',
    'DryRunHost',
    'provision',
]
