from abc import ABC, abstractmethod

import PyPowerFlex

from copy_offload.array_action.array_action_types import Host, LunMapping, Port
from copy_offload.common.config import config
from copy_offload.common.copy_offload_logger import get_stdout_logger

logger = get_stdout_logger()

MAPPED_SDC_INFO_KEY = 'mappedSdcInfo'
SDC_GUID_PROTOCOL = "guid"
SDC_IP_PROTOCOL = "ip"


def _generate_host(api_sdc):
    ports = []
    if api_sdc.get('sdcGuid'):
        ports.append(Port(address=api_sdc['sdcGuid'], protocol=SDC_GUID_PROTOCOL))
    sdc_ips = api_sdc.get('sdcIps') or []
    if api_sdc.get('sdcIp') and api_sdc['sdcIp'] not in sdc_ips:
        sdc_ips = [api_sdc['sdcIp']] + sdc_ips
    ports.extend(Port(address=sdc_ip, protocol=SDC_IP_PROTOCOL) for sdc_ip in sdc_ips)
    return Host(id=api_sdc['id'], name=api_sdc.get('name') or api_sdc['id'], ports=ports)


class PowerFlexClient(ABC):
    """
    The narrow part of the PowerFlex gateway API the mediator consumes.
    Implementations raise PyPowerFlex exceptions.
    """

    @abstractmethod
    def get_system(self, system_id):
        raise NotImplementedError

    @abstractmethod
    def get_volume(self, volume_id):
        """
        Returns:
            volume dict or None when the volume does not exist
        """
        raise NotImplementedError

    @abstractmethod
    def get_volume_mappings(self, volume_id):
        raise NotImplementedError

    @abstractmethod
    def get_sdcs(self):
        raise NotImplementedError

    @abstractmethod
    def map_volume_to_sdc(self, volume_id, sdc_id):
        raise NotImplementedError

    @abstractmethod
    def unmap_volume_from_sdc(self, volume_id, sdc_id):
        raise NotImplementedError


class PowerFlexRESTClient(PowerFlexClient):
    """
    driver side client. Used to interaction with PyPowerFlex as an adaptor.
    """

    def __init__(self, service_address, user, password, insecure=False, port=None):
        self._client = PyPowerFlex.PowerFlexClient(gateway_address=service_address,
                                                   gateway_port=port or config.powerflex.port,
                                                   username=user,
                                                   password=password,
                                                   verify_certificate=not insecure)
        self._client.initialize()

    def get_system(self, system_id):
        filter_fields = {'id': system_id} if system_id else None
        systems = self._client.system.get(filter_fields=filter_fields)
        return systems[0] if systems else None

    def get_volume(self, volume_id):
        volumes = self._client.volume.get(filter_fields={'id': volume_id})
        return volumes[0] if volumes else None

    def get_volume_mappings(self, volume_id):
        api_volume = self.get_volume(volume_id) or {}
        mapped_sdcs = api_volume.get(MAPPED_SDC_INFO_KEY) or []
        return [LunMapping(host_id=mapped_sdc['sdcId']) for mapped_sdc in mapped_sdcs]

    def get_sdcs(self):
        return [_generate_host(api_sdc) for api_sdc in self._client.sdc.get()]

    def map_volume_to_sdc(self, volume_id, sdc_id):
        self._client.volume.add_mapped_sdc(volume_id,
                                           sdc_id=sdc_id,
                                           allow_multiple_mappings=config.powerflex.allow_multiple_mappings,
                                           access_mode=config.powerflex.access_mode)

    def unmap_volume_from_sdc(self, volume_id, sdc_id):
        self._client.volume.remove_mapped_sdc(volume_id,
                                              sdc_id=sdc_id,
                                              ignore_scsi_initiators=config.powerflex.ignore_scsi_initiators)
