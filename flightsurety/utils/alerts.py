"""Alert manager module"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, TypedDict, Union

import apprise
from apprise import AppriseAsset, NotifyFormat, NotifyType
from web3 import AsyncWeb3

logger = logging.getLogger(__name__)


class AlertConfig(TypedDict):
    """Base alert configuration"""

    cooldown: int
    thresholds: Dict[str, Union[int, float]]


class NotificationConfig(TypedDict):
    """Notification configuration"""

    type: str
    config: Dict[str, str]


@dataclass
class Thresholds:
    """Thresholds for alerts"""

    eth_balance: float  # In ether
    min_oracles: int


class AlertManager:
    """Alert manager class"""

    DEFAULT_THRESHOLDS = Thresholds(eth_balance=1.0, min_oracles=3)

    def __init__(
        self,
        network_name: str,
        alert_config: AlertConfig,
        notification_configs: List[NotificationConfig],
    ):
        self.network_name = network_name
        self.cooldown = alert_config.get("cooldown", 1800)  # Default 30 minutes

        custom_thresholds = alert_config.get("thresholds", {})
        self.thresholds = Thresholds(
            eth_balance=custom_thresholds.get(
                "eth_balance", self.DEFAULT_THRESHOLDS.eth_balance
            ),
            min_oracles=custom_thresholds.get(
                "min_oracles", self.DEFAULT_THRESHOLDS.min_oracles
            ),
        )

        self.asset = AppriseAsset(
            app_id="FlightSurety",
            app_desc="FlightSurety Oracle Node Alerts",
            app_url="https://github.com/",
        )

        self.apprise = apprise.Apprise(asset=self.asset)
        self._setup_notifications(notification_configs)

        self.last_alert_times: Dict[str, float] = {}

    def _setup_notifications(self, notification_configs: List[NotificationConfig]):
        """Setup notification services based on configuration"""
        for config in notification_configs:
            if config["type"] == "slack":
                self.apprise.add(f"slack://{config['config']['webhook_url']}")
            elif config["type"] == "discord":
                self.apprise.add(f"discord://{config['config']['webhook_url']}")
            elif config["type"] == "telegram":
                self.apprise.add(
                    f"tgram://{config['config']['bot_token']}/{config['config']['chat_id']}"
                )
            else:
                logger.warning("Unsupported notification type: %s", config["type"])

        logger.info(
            "Initialized AlertManager with %d notification services", len(self.apprise)
        )

    async def check_eth_balance(self, balance_wei: int, account: str) -> None:
        """Check an oracle account's balance and send alert if below threshold"""
        balance_eth = float(AsyncWeb3.from_wei(balance_wei, "ether"))
        if balance_eth < self.thresholds.eth_balance:
            await self.send_alert(
                "Low Oracle Balance",
                f"*Balance*: *{balance_eth:.4f} ETH*\n*Threshold*: {self.thresholds.eth_balance} ETH\n*Oracle*: {account}",
            )

    async def check_pool_size(self, registered: int, requested: int) -> None:
        """Send alert when fewer oracles registered than the configured minimum"""
        if registered < self.thresholds.min_oracles:
            await self.send_alert(
                "Small Oracle Pool",
                f"*Registered oracles*: *{registered}* of {requested}\n*Minimum required*: {self.thresholds.min_oracles}",
            )

    def _format_alert_message(self, time_str: str, message: str) -> str:
        """Format the alert message for universal compatibility and conciseness"""
        return f"""

*Network*: *{self.network_name}*

*Time*: {time_str}

{message}

------------------------
_This is an automated alert from the FlightSurety oracle node_
        """

    async def send_alert(self, alert_type: str, message: str) -> None:
        """Send a concise alert message to all configured notification services"""
        current_time = time.time()
        time_str = datetime.fromtimestamp(current_time).strftime("%Y-%m-%d %H:%M:%S")

        if current_time - self.last_alert_times.get(alert_type, 0) <= self.cooldown:
            logger.info("Suppressed repeated alert for %s at %s", alert_type, time_str)
            return

        self.last_alert_times[alert_type] = current_time
        formatted_message = self._format_alert_message(time_str, message)

        logger.error("ALERT - %s: %s", alert_type, formatted_message)

        result = await self.apprise.async_notify(
            body=formatted_message,
            title=f"FlightSurety Alert: {alert_type}",
            notify_type=self._get_notify_type(alert_type),
            body_format=NotifyFormat.TEXT,
        )

        if result:
            logger.info("Successfully sent alert to all configured services")
        else:
            logger.error("Failed to send alert to one or more services")

    def _get_notify_type(self, alert_type: str) -> NotifyType:
        """Map alert types to Apprise NotifyType"""
        type_map = {
            "Low Oracle Balance": NotifyType.WARNING,
            "Small Oracle Pool": NotifyType.FAILURE,
        }
        return type_map.get(alert_type, NotifyType.INFO)
