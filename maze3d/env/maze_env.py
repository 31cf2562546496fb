import random

import gymnasium as gym
from gymnasium import spaces
import numpy as np
import pygame

from maze3d.env.constants import OBJECT_TYPES, PATH
from maze3d.env.env_state import EnvState, EnvParams
from maze3d.env.renderer import START_POSITION, goal_position, is_walkable, render_char_grid, render_maze
from maze3d.registration import make

UP, RIGHT, DOWN, LEFT, NEW_MAZE = range(5)
MOVES = [(-1, 0), (0, 1), (1, 0), (0, -1)]


def reset_maze(params: EnvParams, rng: random.Random, maze=None) -> EnvState:
    if maze is None:
        width, height = params.maze_size
        maze = make(params.generator, width, height, 1, rng=rng)
    grid = render_char_grid(maze.adjacency)
    return EnvState(
        grid=grid,
        agent_position=START_POSITION,
        goal_position=goal_position(grid),
    )


def step_maze(params: EnvParams, state: EnvState, action, rng: random.Random):
    reward = 0
    done = False

    if action == NEW_MAZE:
        # only accepted once the maze is solved
        if tuple(state.agent_position) == tuple(state.goal_position):
            state = reset_maze(params, rng)
        return state, reward, done

    row = state.agent_position[0] + MOVES[action][0]
    col = state.agent_position[1] + MOVES[action][1]
    if is_walkable(state.grid, row, col):
        state.agent_position = (row, col)
        if state.agent_position == tuple(state.goal_position):
            reward = 1
            done = True

    return state, reward, done


def object_grid(state: EnvState) -> np.ndarray:
    obs = np.where(state.grid == PATH, OBJECT_TYPES["empty"], OBJECT_TYPES["wall"]).astype(np.uint8)
    obs[tuple(state.goal_position)] = OBJECT_TYPES["goal"]
    obs[tuple(state.agent_position)] = OBJECT_TYPES["agent"]
    return obs


class MazeGameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    def __init__(self, env_params: EnvParams, renderer=render_maze, reset=reset_maze, step=step_maze):
        super().__init__()
        self.renderer = renderer
        self.reset_fn = reset
        self.step_fn = step
        self.env_params = env_params
        self.render_mode = "rgb_array"
        self.rng = random.Random(env_params.seed)

        self.width, self.height = env_params.maze_size
        self.action_space = spaces.Discrete(5)
        self.observation_space = spaces.Box(
            low=0,
            high=max(OBJECT_TYPES.values()),
            shape=(2 * self.height - 1, 2 * self.width - 1),
            dtype=np.uint8
        )

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)
        if seed is not None:
            self.rng = random.Random(seed)
        # options["maze"] starts the game on an already generated maze
        maze = (options or {}).get("maze")
        self.state = self.reset_fn(self.env_params, self.rng, maze)
        return self.get_obs(), {}

    def step(self, action):
        state, reward, done = self.step_fn(self.env_params, self.state, action, self.rng)
        self.state = state
        return self.get_obs(), reward, done, False, {}

    def get_obs(self):
        return object_grid(self.state)

    def render(self):
        img = self.renderer(self.state, self.env_params.colors, self.env_params.pix_size)
        return np.array(img.convert('RGB'))


keys_to_action = {
    pygame.K_UP: UP,
    pygame.K_k: UP,
    pygame.K_RIGHT: RIGHT,
    pygame.K_l: RIGHT,
    pygame.K_DOWN: DOWN,
    pygame.K_j: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_h: LEFT,
    pygame.K_RETURN: NEW_MAZE,
    pygame.K_KP_ENTER: NEW_MAZE,
}


def play(env, keys_to_action=keys_to_action, fps=30, options=None):
    running = True
    pygame.init()
    pygame.display.set_caption("Maze")
    env.reset(options=options)
    obs = env.render()
    screen = pygame.display.set_mode((obs.shape[1], obs.shape[0]))
    clock = pygame.time.Clock()

    while running:
        action = None

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                elif event.key in keys_to_action:
                    action = keys_to_action[event.key]

        if action is not None:
            _, reward, done, _, _ = env.step(action)
            if done:
                print("Goal reached! Press enter for a new maze.")

        obs = env.render()
        if screen.get_size() != (obs.shape[1], obs.shape[0]):
            screen = pygame.display.set_mode((obs.shape[1], obs.shape[0]))
        surface = pygame.surfarray.make_surface(obs.transpose((1, 0, 2)))
        screen.blit(surface, (0, 0))

        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
