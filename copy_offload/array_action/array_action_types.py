from dataclasses import dataclass, field

import copy_offload.array_action.errors as array_errors
from copy_offload.array_action.settings import (CONTEXT_HOST_ID, CONTEXT_MAPPED_HOST_NAME,
                                                CONTEXT_REAL_HOST_NAME)


@dataclass
class ArrayConnectionInfo:
    array_type: str
    endpoint: str
    user: str
    password: str = field(repr=False)
    insecure: bool = False
    system_id: str = None


@dataclass
class Lun:
    name: str = ''
    ldevice_id: str = ''
    serial_number: str = ''
    volume_handle: str = ''
    iqn: str = ''
    naa: str = ''


@dataclass
class Port:
    address: str
    protocol: str = ''


@dataclass
class Host:
    id: str
    name: str
    ports: list = field(default_factory=list, repr=False)


@dataclass
class LunMapping:
    host_id: str
    lun: int = None
    host_cluster_id: str = None
    clustered: bool = False


@dataclass
class MappingContext:
    """
    Facts produced by initiator group setup and consumed by map, unmap and mapped groups discovery.
    Every field is optional, each backend requires a different subset of them.
    """
    host_id: str = None
    logical_host_name: str = None
    real_host_name: str = None
    mapped_host_name: str = None

    def require(self, key, initiator_group):
        value = getattr(self, key)
        if value is None:
            raise array_errors.MappingContextKeyMissingError(key, initiator_group)
        return value

    def get_real_host_name(self, initiator_group):
        """
        The group used at setup time maps to the clonner host found on storage,
        any other group is the host the volume was originally mapped to.
        """
        if initiator_group == self.logical_host_name:
            return self.require(CONTEXT_REAL_HOST_NAME, initiator_group)
        return self.require(CONTEXT_MAPPED_HOST_NAME, initiator_group)

    def get_host_id(self, initiator_group):
        return self.require(CONTEXT_HOST_ID, initiator_group)

    def record_mapped_host(self, host_name):
        if self.mapped_host_name is None:
            self.mapped_host_name = host_name
            return True
        return False
