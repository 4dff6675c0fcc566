# main.py
import logging
import math

import pygame

import config
from evosim.genome import AppendageType
from evosim.mathutils import clamp, lerp, normalize
from evosim.simulation import Simulation

logger = logging.getLogger("evosim")

FIN_COLOR = (40, 110, 200)
FLAGELLA_COLOR = (200, 90, 40)
RESOURCE_COLOR = (100, 200, 100)
TEXT_COLOR = (40, 40, 40)


def configure_logging(level=config.LOG_LEVEL):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO),
                        format=config.LOG_FORMAT)


def organism_color(snapshot):
    """Energy-tinted body colour: greener when well fed."""
    energy_pct = clamp(normalize(snapshot.state.energy, 0.0, config.REPRODUCTION_ENERGY_THRESHOLD), 0.0, 1.0)
    shape = snapshot.phenotype.body_shape
    return (int(lerp(60, 200, shape)), int(lerp(60, 220, energy_pct)), 150)


def draw(screen, font, sim):
    screen.fill(config.COLOR_BG)
    environment = sim.get_environment()
    for resource in environment.resources:
        pygame.draw.circle(screen, RESOURCE_COLOR, (int(resource.x), int(resource.y)), config.RESOURCE_RADIUS)

    for snapshot in sim.get_all_organisms():
        x, y, r = snapshot.state.x, snapshot.state.y, snapshot.radius
        heading = snapshot.state.heading
        # appendages point outwards around the body, rotated with the heading
        for appendage in snapshot.phenotype.appendages:
            a = heading + appendage.angle * 2 * math.pi
            length = r * (0.5 + appendage.length)
            color = FIN_COLOR if appendage.type is AppendageType.FIN else FLAGELLA_COLOR
            end = (int(x + length * math.cos(a)), int(y + length * math.sin(a)))
            pygame.draw.line(screen, color, (int(x), int(y)), end, 2)
        pygame.draw.circle(screen, organism_color(snapshot), (int(x), int(y)), int(r))

    stats = sim.get_statistics()
    lines = [
        f"FPS: {stats['fps']:.0f}  Speed: {sim.scheduler.speed:.1f}x  "
        f"{'RUNNING' if sim.is_running else 'PAUSED [SPACE]'}",
        f"Population: {stats['population_size']}  Generation: {stats['current_generation']}  "
        f"Depth: {stats['max_generation_depth']}",
        f"Mutation: {sim.mutation_rate:.3f} [ ]  Pressure: {sim.environmental_pressure:.1f} [P]",
    ]
    for i, text in enumerate(lines):
        screen.blit(font.render(text, True, TEXT_COLOR), (10, 10 + i * 20))
    pygame.display.flip()


def handle_events(sim):
    """Returns False when the window was closed."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type != pygame.KEYDOWN:
            continue
        if event.key == pygame.K_SPACE:
            if sim.is_running:
                sim.stop()
            else:
                sim.start(sim.scheduler.speed)
        elif event.key == pygame.K_r:
            sim.reset()
        elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
            sim.set_speed(sim.scheduler.speed + 0.5)
        elif event.key == pygame.K_MINUS:
            sim.set_speed(sim.scheduler.speed - 0.5)
        elif event.key == pygame.K_RIGHTBRACKET:
            sim.set_mutation_rate(sim.mutation_rate + 0.01)
        elif event.key == pygame.K_LEFTBRACKET:
            sim.set_mutation_rate(sim.mutation_rate - 0.01)
        elif event.key == pygame.K_p:
            sim.set_environmental_pressure((sim.environmental_pressure + 0.25) % 1.25)
    return True


def main():
    configure_logging()
    pygame.init()
    screen = pygame.display.set_mode((config.SCREEN_WIDTH, config.SCREEN_HEIGHT))
    pygame.display.set_caption("Evolution Organism Simulator")
    font = pygame.font.SysFont("Arial", 16)

    sim = Simulation(config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
    if not sim.initialize():
        logger.error("Could not initialize the simulation")
        pygame.quit()
        return

    idle_clock = pygame.time.Clock()
    sim.start()
    open_window = True
    while open_window:
        open_window = handle_events(sim)
        if not sim.scheduler.run_frame():
            idle_clock.tick(config.FPS)
        draw(screen, font, sim)

    sim.stop()
    pygame.quit()

if __name__ == '__main__':
    main()
