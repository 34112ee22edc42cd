from kutulu.game.tick_loop import TickLoop

loop = TickLoop.launch_from_files(
    config_main="config/bot_config.yml",
    extra_defs=None,
)
