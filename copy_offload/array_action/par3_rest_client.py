from abc import ABC, abstractmethod

from hpe3parclient import client as hpe3par_client

from copy_offload.array_action.array_action_types import Host, LunMapping, Port
from copy_offload.array_action.settings import FC_CONNECTIVITY_TYPE, ISCSI_CONNECTIVITY_TYPE
from copy_offload.common.config import config
from copy_offload.common.copy_offload_logger import get_stdout_logger

logger = get_stdout_logger()

HOST_SET_PREFIX = config.par3.host_set_prefix
API_URL_FORMAT = "https://{0}:{1}{2}"

MEMBERS_KEY = 'members'
SET_MEMBERS_KEY = 'setmembers'


def to_host_set_target(host_set_name):
    return "{0}{1}".format(HOST_SET_PREFIX, host_set_name)


def from_vlun_hostname(hostname):
    if hostname and hostname.startswith(HOST_SET_PREFIX):
        return hostname[len(HOST_SET_PREFIX):]
    return hostname


def generate_volume_mappings(vluns, volume_name):
    volume_vluns = [vlun for vlun in vluns if vlun.get('volumeName') == volume_name]
    # active vluns repeat each template per host and port
    templates = [vlun for vlun in volume_vluns if not vlun.get('active')]
    return [LunMapping(host_id=from_vlun_hostname(vlun.get('hostname')), lun=vlun.get('lun'))
            for vlun in templates or volume_vluns]


def _generate_host(api_host):
    ports = [Port(address=path.get('wwn', ''), protocol=FC_CONNECTIVITY_TYPE)
             for path in api_host.get('FCPaths', [])]
    ports.extend(Port(address=path.get('name', ''), protocol=ISCSI_CONNECTIVITY_TYPE)
                 for path in api_host.get('iSCSIPaths', []))
    return Host(id=api_host['name'], name=api_host['name'], ports=ports)


class Par3Client(ABC):
    """
    The narrow part of the 3PAR/Primera web services API the mediator consumes.
    Implementations raise hpe3parclient exceptions.
    """

    @abstractmethod
    def logout(self):
        raise NotImplementedError

    @abstractmethod
    def get_volume(self, volume_name):
        """
        Returns:
            dict with at least name, id and wwn
        """
        raise NotImplementedError

    @abstractmethod
    def get_hosts(self):
        raise NotImplementedError

    @abstractmethod
    def create_host(self, host_name, fc_wwns, iscsi_names):
        raise NotImplementedError

    @abstractmethod
    def get_host_sets(self):
        raise NotImplementedError

    @abstractmethod
    def get_host_set_members(self, host_set_name):
        raise NotImplementedError

    @abstractmethod
    def create_host_set(self, host_set_name):
        raise NotImplementedError

    @abstractmethod
    def add_host_to_host_set(self, host_set_name, host_name):
        raise NotImplementedError

    @abstractmethod
    def get_volume_vluns(self, volume_name):
        raise NotImplementedError

    @abstractmethod
    def create_vlun(self, volume_name, hostname):
        """
        Args:
            hostname : host name, or set:<host set name> for a host set vlun template
        """
        raise NotImplementedError

    @abstractmethod
    def delete_vlun(self, volume_name, lun, hostname):
        raise NotImplementedError


class Par3RESTClient(Par3Client):
    """
    driver side client. Used to interaction with hpe3parclient as an adaptor.
    """

    def __init__(self, service_address, user, password, insecure=False, port=None):
        api_url = API_URL_FORMAT.format(service_address, port or config.par3.port, config.par3.api_path)
        self._client = hpe3par_client.HPE3ParClient(api_url, secure=not insecure)
        self._client.login(user, password)

    def logout(self):
        self._client.logout()

    def get_volume(self, volume_name):
        return self._client.getVolume(volume_name)

    def get_hosts(self):
        api_hosts = self._client.getHosts().get(MEMBERS_KEY, [])
        return [_generate_host(api_host) for api_host in api_hosts]

    def create_host(self, host_name, fc_wwns, iscsi_names):
        self._client.createHost(host_name, iscsiNames=iscsi_names or None, FCWwns=fc_wwns or None)

    def get_host_sets(self):
        api_host_sets = self._client.getHostSets().get(MEMBERS_KEY, [])
        return [Host(id=host_set['name'], name=host_set['name']) for host_set in api_host_sets]

    def get_host_set_members(self, host_set_name):
        host_set = self._client.getHostSet(host_set_name)
        return host_set.get(SET_MEMBERS_KEY) or []

    def create_host_set(self, host_set_name):
        self._client.createHostSet(host_set_name, comment=config.identifier.name)

    def add_host_to_host_set(self, host_set_name, host_name):
        self._client.addHostToHostSet(host_set_name, host_name)

    def get_volume_vluns(self, volume_name):
        return generate_volume_mappings(self._client.getVLUNs().get(MEMBERS_KEY, []), volume_name)

    def create_vlun(self, volume_name, hostname):
        return self._client.createVLUN(volume_name, hostname=hostname, auto=True)

    def delete_vlun(self, volume_name, lun, hostname):
        self._client.deleteVLUN(volume_name, lun, hostname=hostname)
