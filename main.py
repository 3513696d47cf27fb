# main.py

import pygame
import constants
import logging
import logger_setup
from config import load_config, TuningConfig
from firework_system import FireworkSystem
from random_source import RandomSource
from renderer import HdrRenderer

# Get the application's dedicated logger
logger = logging.getLogger(constants.LOGGER_NAME)


def apply_bloom(screen: pygame.Surface):
    """
    Adds a soft glow around bright pixels by downscaling, upscaling and
    additively blending the presented frame.
    """
    scale = constants.BLOOM_RADIUS
    scaled_size = (constants.WIDTH // scale, constants.HEIGHT // scale)
    scaled_surface = pygame.transform.smoothscale(screen, scaled_size)
    blurred_surface = pygame.transform.smoothscale(scaled_surface, (constants.WIDTH, constants.HEIGHT))

    intensity = constants.BLOOM_INTENSITY
    blurred_surface.fill((intensity, intensity, intensity), special_flags=pygame.BLEND_RGB_MULT)
    screen.blit(blurred_surface, (0, 0), special_flags=pygame.BLEND_RGB_ADD)


def run_simulation_loop(firework_system, renderer, screen, clock, run_config):
    """
    The main loop. The simulation clock is the pygame tick counter in seconds,
    which is monotonic for the lifetime of the process.
    """
    running = True
    tick = 0
    log_throttle = run_config.get('log_throttle_ticks', 300)
    bloom = run_config.get('bloom', True)

    while running:
        # Event handling
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

        # --- Simulation Update ---
        now = pygame.time.get_ticks() / 1000.0
        firework_system.update(now)

        # --- Logging (throttled) ---
        if tick % log_throttle == 0:
            logger.debug(
                f"Tick={tick}, "
                f"Time={now:.2f}s, "
                f"Live={len(firework_system)}, "
                f"Spawned={firework_system.total_spawned}, "
                f"Disposed={firework_system.total_disposed}, "
                f"Evicted={firework_system.total_evicted}, "
                f"TotalLuminance={firework_system.get_total_luminance():.2f}, "
                f"FPS={clock.get_fps():.1f}"
            )

        # --- Drawing ---
        renderer.clear()
        firework_system.draw(renderer)
        renderer.present(screen)
        if bloom:
            apply_bloom(screen)

        pygame.display.flip()
        clock.tick(constants.FPS)
        tick += 1


def main():
    """
    Main function to initialize and run the fireworks simulation.
    """
    # --- Setup ---
    config = load_config('config.json')
    logger_setup.setup_logging(config)

    sim_config = config['simulation']
    render_config = config.get('rendering', {})
    tuning = TuningConfig.from_dict(config.get('tuning', {}))

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random source
    rng = RandomSource(config.get('master_seed'))
    logger.info(f"Master random source initialized with seed: {config.get('master_seed')}")

    # --- Initialization ---
    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT))
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()

    firework_system = FireworkSystem(
        config=sim_config,
        tuning=tuning,
        rng=rng,
        bounds=(constants.WIDTH, constants.HEIGHT)
    )
    renderer = HdrRenderer(
        constants.WIDTH,
        constants.HEIGHT,
        tone_mapping=render_config.get('tone_mapping', 'reinhard')
    )

    run_config = {
        'log_throttle_ticks': sim_config.get('log_throttle_ticks', 300),
        'bloom': render_config.get('bloom', True),
    }
    run_simulation_loop(firework_system, renderer, screen, clock, run_config)

    logger.info("Application shutting down.")
    pygame.quit()

if __name__ == "__main__":
    main()
