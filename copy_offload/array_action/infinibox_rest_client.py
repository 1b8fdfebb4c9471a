from abc import ABC, abstractmethod

import infinisdk

from copy_offload.array_action.array_action_types import Host, LunMapping, Port
from copy_offload.common.copy_offload_logger import get_stdout_logger

logger = get_stdout_logger()

VOLUME_LUNS_PATH = "volumes/{0}/luns"
HOST_LUNS_PATH = "hosts/{0}/luns"
HOST_VOLUME_LUN_PATH = "hosts/{0}/luns/volume_id/{1}"


def _generate_volume(sdk_volume):
    return {'id': sdk_volume.id,
            'name': sdk_volume.get_name(),
            'serial': sdk_volume.get_serial().serial}


def _generate_host(sdk_host):
    ports = [Port(address=str(port)) for port in sdk_host.get_ports()]
    return Host(id=sdk_host.id, name=sdk_host.get_name(), ports=ports)


def _generate_lun_mapping(api_lun):
    return LunMapping(host_id=api_lun.get('host_id'),
                      lun=api_lun.get('lun'),
                      host_cluster_id=api_lun.get('host_cluster_id'),
                      clustered=bool(api_lun.get('clustered')))


class InfiniBoxClient(ABC):
    """
    The narrow part of the InfiniBox management API the mediator consumes.
    Implementations raise infinisdk exceptions.
    Volumes are returned as dicts with id, name and serial.
    """

    @abstractmethod
    def logout(self):
        raise NotImplementedError

    @abstractmethod
    def get_volume_by_name(self, volume_name):
        raise NotImplementedError

    @abstractmethod
    def get_volume_by_id(self, volume_id):
        raise NotImplementedError

    @abstractmethod
    def get_host_by_name(self, host_name):
        raise NotImplementedError

    @abstractmethod
    def get_hosts(self):
        raise NotImplementedError

    @abstractmethod
    def get_volume_mappings(self, volume_id):
        raise NotImplementedError

    @abstractmethod
    def map_volume_to_host(self, volume_id, host_id):
        raise NotImplementedError

    @abstractmethod
    def unmap_volume_from_host(self, volume_id, host_id):
        raise NotImplementedError


class InfiniBoxRESTClient(InfiniBoxClient):
    """
    driver side client. Used to interaction with infinisdk as an adaptor.
    """

    def __init__(self, service_address, user, password):
        self._system = infinisdk.InfiniBox(service_address, auth=(user, password), use_ssl=True)
        self._system.login()

    def logout(self):
        self._system.logout()

    def get_volume_by_name(self, volume_name):
        sdk_volume = self._system.volumes.safe_get(name=volume_name)
        return _generate_volume(sdk_volume) if sdk_volume else None

    def get_volume_by_id(self, volume_id):
        sdk_volume = self._system.volumes.safe_get(id=volume_id)
        return _generate_volume(sdk_volume) if sdk_volume else None

    def get_host_by_name(self, host_name):
        sdk_host = self._system.hosts.safe_get(name=host_name)
        return _generate_host(sdk_host) if sdk_host else None

    def get_hosts(self):
        return [_generate_host(sdk_host) for sdk_host in self._system.hosts.to_list()]

    def get_volume_mappings(self, volume_id):
        api_luns = self._system.api.get(VOLUME_LUNS_PATH.format(volume_id)).get_result()
        return [_generate_lun_mapping(api_lun) for api_lun in api_luns]

    def map_volume_to_host(self, volume_id, host_id):
        self._system.api.post(HOST_LUNS_PATH.format(host_id), data={'volume_id': volume_id})

    def unmap_volume_from_host(self, volume_id, host_id):
        self._system.api.delete(HOST_VOLUME_LUN_PATH.format(host_id, volume_id))
