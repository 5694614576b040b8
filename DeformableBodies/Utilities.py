import math

__all__ = [ "cacheLastResult", "evalExpression" ]

def cacheLastResult(func):
    '''
        Function decorator that caches that function's last return value.
            Used to avoid re-evaluating a body-frame trajectory when the same time is requested several times in a row
            Could use @functools.lru_cache(maxsize=1) to achieve the same behavior, but that requires hashable arguments
    '''
    cache = dict()
    cache[1] = None # Cache last argument list here
    cache[2] = None # Cache last result here

    def memoized_func(*args):
        # Return cached result if available
        if cache[1] == args:
            return cache[2]
        
        # Compute and cache result
        result = func(*args)
        cache[1] = args
        cache[2] = result
        return result

    return memoized_func

def evalExpression(statement: str, additionalVars=None):
    ''' Evaluates simple math expressions found in definition files, ex: "math.pi/6" '''
    globalVars = {
        'math': math, # Make math functions available
        'pi': math.pi
    }

    if additionalVars == None:
        additionalVars = {}

    return eval(statement, globalVars, additionalVars)
