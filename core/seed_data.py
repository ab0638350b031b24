from models.channel_model import ChannelRecord


def initial_channels() -> list[ChannelRecord]:
    """Channel performance the dashboard starts with."""
    return [
        ChannelRecord.from_inputs("1", "Google Search Ads", 15000, 450, 45000),
        ChannelRecord.from_inputs("2", "Facebook / Instagram", 12000, 320, 28800),
        ChannelRecord.from_inputs("3", "LinkedIn Ads", 8000, 90, 13500),
        ChannelRecord.from_inputs("4", "YouTube", 5000, 80, 6000),
        ChannelRecord.from_inputs("5", "Email Marketing", 2000, 150, 15000),
    ]
